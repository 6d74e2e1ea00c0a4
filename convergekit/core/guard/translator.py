from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

from ..domain.enums import ErrorKind
from .evaluator import guard_callable

if TYPE_CHECKING:
    from ..resource.base import Resource

# A rewritten command guard is false, not fatal, when the command fails.
GUARD_COMMAND_HANDLED_KINDS = frozenset({ErrorKind.SHELL_COMMAND_FAILED})


def translate_command_block(
    resource: Resource,
    command: Optional[str] = None,
    block: Optional[Callable[[], Any]] = None,
) -> tuple[Optional[str], Optional[Callable[[], Any]]]:
    """Route a guard command through the resource's guard interpreter.

    With a guard interpreter designated, a command and no block, the command
    becomes the ``code`` of an anonymous interpreter resource and the result
    is ``(None, guard)``. Every other combination passes through unchanged.
    """
    guard_interpreter = resource.get("guard_interpreter") if resource.supports("guard_interpreter") else None
    if guard_interpreter and command is not None and block is None:
        translated = guard_callable(
            resource,
            guard_interpreter,
            GUARD_COMMAND_HANDLED_KINDS,
            {"code": command},
        )
        return None, translated
    return command, block
