from __future__ import annotations

import json

import pytest

from convergekit.app_api.factories import build_parent_resource, build_run_context
from convergekit.app_api.guard_config import (
    DEFAULT_GUARD_CONFIG,
    GuardConfig,
    GuardConfigError,
    load_guard_config,
)
from convergekit.core.domain.errors import UnknownResourceType
from convergekit.core.domain.models import Node
from convergekit.core.resource.script import Bash


def _write(tmp_path, payload) -> str:
    path = tmp_path / "guard.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_load_full_config(tmp_path) -> None:
    path = _write(
        tmp_path,
        {
            "resource_type": "bash",
            "guard_interpreter": "bash",
            "cwd": "/srv/app",
            "user": "deploy",
            "umask": "027",
            "timeout": 30,
            "environment": {"RAILS_ENV": "production"},
        },
    )

    cfg = load_guard_config(path)

    assert cfg.resource_type == "bash"
    assert cfg.guard_interpreter == "bash"
    assert cfg.cwd == "/srv/app"
    assert cfg.user == "deploy"
    assert cfg.group is None
    assert cfg.umask == "027"
    assert cfg.timeout == pytest.approx(30.0)
    assert cfg.environment == {"RAILS_ENV": "production"}


def test_missing_resource_type_rejected(tmp_path) -> None:
    with pytest.raises(GuardConfigError, match="resource_type"):
        load_guard_config(_write(tmp_path, {"guard_interpreter": "bash"}))


@pytest.mark.parametrize(
    "payload",
    [
        {"resource_type": 3},
        {"resource_type": "bash", "timeout": "soon"},
        {"resource_type": "bash", "timeout": True},
        {"resource_type": "bash", "timeout": 0},
        {"resource_type": "bash", "environment": ["A=1"]},
        {"resource_type": "bash", "environment": {"A": 1}},
    ],
)
def test_invalid_fields_rejected(tmp_path, payload) -> None:
    with pytest.raises(GuardConfigError):
        load_guard_config(_write(tmp_path, payload))


def test_non_object_and_bad_json_rejected(tmp_path) -> None:
    with pytest.raises(GuardConfigError):
        load_guard_config(_write(tmp_path, ["bash"]))

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(GuardConfigError):
        load_guard_config(broken)

    with pytest.raises(GuardConfigError):
        load_guard_config(tmp_path / "missing.json")


def test_guard_config_error_is_value_error() -> None:
    assert issubclass(GuardConfigError, ValueError)


def test_with_overrides_ignores_none() -> None:
    cfg = DEFAULT_GUARD_CONFIG.with_overrides(cwd="/tmp", user=None)
    assert cfg.cwd == "/tmp"
    assert cfg.user is None
    assert cfg.resource_type == "bash"
    assert DEFAULT_GUARD_CONFIG.cwd is None


def test_build_parent_resource_applies_config() -> None:
    context = build_run_context(node=Node(name="web01"), runner=object())
    cfg = GuardConfig(
        resource_type="bash",
        guard_interpreter="bash",
        cwd="/srv/app",
        timeout=12.5,
        environment={"LANG": "C"},
    )

    resource = build_parent_resource(cfg, context)

    assert isinstance(resource, Bash)
    assert resource.run_context is context
    assert resource.get("guard_interpreter") == "bash"
    assert resource.get("cwd") == "/srv/app"
    assert resource.get("timeout") == 12.5
    assert resource.get("environment") == {"LANG": "C"}


def test_build_parent_resource_skips_unsupported_attributes() -> None:
    context = build_run_context(node=Node(name="web01"), runner=object())
    resource = build_parent_resource(GuardConfig(resource_type="execute", guard_interpreter="bash"), context)
    assert resource.supports("guard_interpreter") is False


def test_build_parent_resource_unknown_type() -> None:
    context = build_run_context(node=Node(name="web01"), runner=object())
    with pytest.raises(UnknownResourceType):
        build_parent_resource(GuardConfig(resource_type="powershell_script"), context)
