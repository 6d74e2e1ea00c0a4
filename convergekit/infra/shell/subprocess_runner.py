from __future__ import annotations

import logging
import os
import subprocess
from typing import Any, Mapping, Optional

from convergekit.core.resource.ports.command_runner_port import CommandResult, CommandRunner

logger = logging.getLogger(__name__)


class SubprocessCommandRunner(CommandRunner):
    """Runs commands through the platform shell and reports the exit status.

    Environment entries are merged over the current process environment.
    user/group/umask are POSIX-only and passed through only when set.
    """

    def __init__(self, base_environment: Optional[Mapping[str, str]] = None) -> None:
        self._base_environment = dict(base_environment) if base_environment is not None else None

    def run(
        self,
        command: str,
        *,
        cwd: Optional[str] = None,
        environment: Optional[Mapping[str, str]] = None,
        user: Optional[str] = None,
        group: Optional[str] = None,
        umask: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> CommandResult:
        kwargs: dict[str, Any] = {}
        if user is not None:
            kwargs["user"] = user
        if group is not None:
            kwargs["group"] = group
        if umask is not None:
            kwargs["umask"] = umask

        env = dict(self._base_environment if self._base_environment is not None else os.environ)
        if environment:
            env.update(environment)

        logger.debug("Running command: %s (cwd=%s timeout=%s)", command, cwd, timeout)
        try:
            proc = subprocess.run(
                command,
                shell=True,
                check=False,
                capture_output=True,
                text=True,
                cwd=cwd,
                env=env,
                timeout=timeout,
                **kwargs,
            )
        except subprocess.TimeoutExpired as exc:
            logger.warning("Command timed out after %ss: %s", timeout, command)
            return CommandResult(
                exit_status=None,
                stdout=_as_text(exc.stdout),
                stderr=_as_text(exc.stderr),
                timed_out=True,
            )

        return CommandResult(
            exit_status=int(proc.returncode),
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
