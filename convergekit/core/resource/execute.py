"""Execute resource: run one external command.

Responsibilities:
  - Carry the command plus its process options (cwd, env, user, umask, timeout).
  - Fail with a classifiable error when the exit status is not expected.

Must not:
  - Spawn processes directly; all execution goes through the CommandRunner port.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from ..domain.errors import CommandTimedOut, ShellCommandFailed
from .base import AttributeSpec, Resource
from .run_context import RunContext

logger = logging.getLogger(__name__)


class Execute(Resource):
    resource_name = "execute"
    ATTRIBUTES = {
        "command": AttributeSpec(kind_of=(str,)),
        "cwd": AttributeSpec(kind_of=(str,)),
        "environment": AttributeSpec(kind_of=(dict,)),
        "user": AttributeSpec(kind_of=(str,)),
        "group": AttributeSpec(kind_of=(str,)),
        "path": AttributeSpec(kind_of=(list,)),
        "returns": AttributeSpec(default=[0], kind_of=(int, list)),
        "timeout": AttributeSpec(default=3600, kind_of=(int, float)),
        "umask": AttributeSpec(kind_of=(str, int)),
        "creates": AttributeSpec(kind_of=(str,)),
    }
    ACTIONS = ("run", "nothing")
    DEFAULT_ACTION = "run"

    def __init__(self, name: str, run_context: Optional[RunContext] = None) -> None:
        super().__init__(name, run_context)
        self.set("command", name)

    def command_line(self) -> str:
        return self.get("command")

    def expected_returns(self) -> list[int]:
        returns = self.get("returns")
        if isinstance(returns, list):
            return returns
        return [returns]

    def already_created(self) -> bool:
        creates = self.get("creates")
        if not creates:
            return False
        target = os.path.join(self.get("cwd") or "", creates)
        if os.path.exists(target):
            logger.debug("%s skipped, %s exists", self, target)
            return True
        return False

    def action_run(self) -> bool:
        if self.already_created():
            return False
        return self.run_command(self.command_line())

    def run_command(self, command: str) -> bool:
        timeout = self.get("timeout")
        result = self.runner.run(
            command,
            cwd=self.get("cwd"),
            environment=self._environment(),
            user=self.get("user"),
            group=self.get("group"),
            umask=self._umask(),
            timeout=timeout,
        )
        if result.timed_out:
            raise CommandTimedOut(command, timeout)

        expected = self.expected_returns()
        if result.exit_status not in expected:
            raise ShellCommandFailed(
                command,
                result.exit_status if result.exit_status is not None else -1,
                expected,
                stdout=result.stdout,
                stderr=result.stderr,
            )
        logger.info("%s ran successfully", self)
        return True

    def _environment(self) -> Optional[dict[str, str]]:
        environment = dict(self.get("environment") or {})
        path = self.get("path")
        if path:
            inherited = environment.get("PATH", os.environ.get("PATH", ""))
            environment["PATH"] = os.pathsep.join([*path, inherited] if inherited else path)
        return environment or None

    def _umask(self) -> Optional[int]:
        umask = self.get("umask")
        if isinstance(umask, str):
            return int(umask, 8)
        return umask
