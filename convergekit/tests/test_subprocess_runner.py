from __future__ import annotations

import os

import pytest

from convergekit.infra.shell.subprocess_runner import SubprocessCommandRunner

pytestmark = pytest.mark.skipif(os.name != "posix", reason="uses a POSIX shell")


def test_exit_status_and_output() -> None:
    result = SubprocessCommandRunner().run("echo hello; echo oops >&2; exit 3")

    assert result.exit_status == 3
    assert result.stdout.strip() == "hello"
    assert result.stderr.strip() == "oops"
    assert result.timed_out is False
    assert result.succeeded is False


def test_success_is_reported() -> None:
    result = SubprocessCommandRunner().run("true")
    assert result.exit_status == 0
    assert result.succeeded is True


def test_environment_is_merged(tmp_path) -> None:
    runner = SubprocessCommandRunner(base_environment={"PATH": os.environ.get("PATH", "")})

    result = runner.run('printf "%s" "$CK_GUARD_VALUE"', environment={"CK_GUARD_VALUE": "alice"})

    assert result.stdout == "alice"


def test_cwd_is_used(tmp_path) -> None:
    result = SubprocessCommandRunner().run("pwd", cwd=str(tmp_path))
    assert os.path.realpath(result.stdout.strip()) == os.path.realpath(str(tmp_path))


def test_timeout_is_reported() -> None:
    result = SubprocessCommandRunner().run("sleep 5", timeout=0.2)

    assert result.timed_out is True
    assert result.exit_status is None
    assert result.succeeded is False
