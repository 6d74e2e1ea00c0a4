"""Defaults for the resource whose guard is checked from the command line.

Responsibilities:
  - Load and validate a JSON config file into GuardConfig.
  - Apply CLI overrides without mutating the loaded config.
"""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


class GuardConfigError(ValueError):
    pass


@dataclass(frozen=True)
class GuardConfig:
    resource_type: str = "bash"
    guard_interpreter: Optional[str] = None
    cwd: Optional[str] = None
    user: Optional[str] = None
    group: Optional[str] = None
    umask: Optional[str] = None
    timeout: Optional[float] = None
    environment: dict[str, str] = field(default_factory=dict)

    def with_overrides(self, **overrides: Any) -> GuardConfig:
        changes = {key: value for key, value in overrides.items() if value is not None}
        return dataclasses.replace(self, **changes)


DEFAULT_GUARD_CONFIG = GuardConfig()


def _require(payload: dict[str, Any], key: str, expected_type: type) -> Any:
    if key not in payload:
        raise GuardConfigError(f"Missing required field '{key}' in guard config")
    return _check_type(key, payload[key], expected_type)


def _optional(payload: dict[str, Any], key: str, expected_type: type) -> Any:
    value = payload.get(key)
    if value is None:
        return None
    return _check_type(key, value, expected_type)


def _check_type(key: str, value: Any, expected_type: type) -> Any:
    if expected_type is float:
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise GuardConfigError(f"Field '{key}' must be float")
        return float(value)
    if not isinstance(value, expected_type):
        raise GuardConfigError(f"Field '{key}' must be {expected_type.__name__}")
    return value


def load_guard_config(path: str | Path) -> GuardConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise GuardConfigError(f"Guard config not found: {config_path}")

    try:
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise GuardConfigError(f"Guard config is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise GuardConfigError("Guard config must be a JSON object")

    environment = _optional(payload, "environment", dict) or {}
    for key, value in environment.items():
        if not isinstance(value, str):
            raise GuardConfigError(f"Environment value for '{key}' must be str")

    timeout = _optional(payload, "timeout", float)
    if timeout is not None and timeout <= 0:
        raise GuardConfigError("Field 'timeout' must be > 0")

    return GuardConfig(
        resource_type=_require(payload, "resource_type", str),
        guard_interpreter=_optional(payload, "guard_interpreter", str),
        cwd=_optional(payload, "cwd", str),
        user=_optional(payload, "user", str),
        group=_optional(payload, "group", str),
        umask=_optional(payload, "umask", str),
        timeout=timeout,
        environment=dict(environment),
    )
