"""only_if / not_if guards attached to a resource.

Responsibilities:
  - Hold one guard condition source (a command or a zero-argument block).
  - Turn the source into a "continue with the action?" decision.

Inputs/Outputs:
  - Inputs: a CommandRunner for command guards; nothing for block guards.
  - Outputs: bool decision; command timeouts raise CommandTimedOut.

Invariants:
  - Block results of GuardResult.UNDETERMINED count as false, so an
    undetermined only_if stops the action and an undetermined not_if lets it run.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from ..domain.enums import GuardKind, GuardResult
from ..domain.errors import CommandTimedOut, ConvergeKitError, MalformedGuard
from ..domain.models import BlockGuard, CommandGuard, GuardConditionSource
from ..resource.ports.command_runner_port import CommandRunner

logger = logging.getLogger(__name__)

_ALLOWED_OPTIONS = frozenset({"cwd", "environment", "timeout"})


class Conditional:
    def __init__(
        self,
        kind: GuardKind,
        source: GuardConditionSource,
        *,
        cwd: Optional[str] = None,
        environment: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.kind = kind
        self.source = source
        self.cwd = cwd
        self.environment = dict(environment) if environment else None
        self.timeout = timeout

    @classmethod
    def only_if(
        cls,
        command: Optional[str] = None,
        block: Optional[Callable[[], Any]] = None,
        **opts: Any,
    ) -> Conditional:
        return cls._build(GuardKind.ONLY_IF, command, block, opts)

    @classmethod
    def not_if(
        cls,
        command: Optional[str] = None,
        block: Optional[Callable[[], Any]] = None,
        **opts: Any,
    ) -> Conditional:
        return cls._build(GuardKind.NOT_IF, command, block, opts)

    @classmethod
    def _build(
        cls,
        kind: GuardKind,
        command: Optional[str],
        block: Optional[Callable[[], Any]],
        opts: dict[str, Any],
    ) -> Conditional:
        if command is not None and block is not None:
            raise MalformedGuard(f"{kind.value} accepts either a command or a block, not both")
        if command is None and block is None:
            raise MalformedGuard(f"{kind.value} requires either a command or a block")
        unknown = sorted(set(opts) - _ALLOWED_OPTIONS)
        if unknown:
            raise MalformedGuard(f"{kind.value} got unsupported options: {unknown}")

        source: GuardConditionSource
        if command is not None:
            source = CommandGuard(command)
        elif callable(block):
            source = BlockGuard(block)
        else:
            raise MalformedGuard(f"{kind.value} block must be callable")
        return cls(kind, source, **opts)

    @property
    def description(self) -> str:
        if isinstance(self.source, CommandGuard):
            return f'{self.kind.value} command "{self.source.command}"'
        return f"{self.kind.value} block"

    def evaluate(self, runner: Optional[CommandRunner] = None) -> bool:
        if isinstance(self.source, CommandGuard):
            return self._evaluate_command(self.source.command, runner)
        value = self.source.block()
        if isinstance(value, GuardResult):
            return value.as_bool() is True
        return bool(value)

    def continue_(self, runner: Optional[CommandRunner] = None) -> bool:
        truth = self.evaluate(runner)
        if self.kind is GuardKind.ONLY_IF:
            return truth
        return not truth

    def _evaluate_command(self, command: str, runner: Optional[CommandRunner]) -> bool:
        if runner is None:
            raise ConvergeKitError(f"{self.description} needs a command runner")
        result = runner.run(
            command,
            cwd=self.cwd,
            environment=self.environment,
            timeout=self.timeout,
        )
        if result.timed_out:
            raise CommandTimedOut(command, self.timeout or 0.0)
        logger.debug("%s exited with %s", self.description, result.exit_status)
        return result.succeeded
