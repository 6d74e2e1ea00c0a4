"""Error taxonomy for guard evaluation and resource actions.

Only errors carrying an ErrorKind can be absorbed by a guard; everything else
propagates to the caller.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .enums import ErrorKind


class ConvergeKitError(Exception):
    kind: Optional[ErrorKind] = None


class InvalidNode(ConvergeKitError):
    pass


class UnknownResourceType(ConvergeKitError):
    def __init__(self, resource_type: str, platform: Optional[str] = None) -> None:
        self.resource_type = resource_type
        self.platform = platform
        where = f" for platform {platform}" if platform else ""
        super().__init__(f"Specified resource {resource_type} unknown{where}")


class MalformedGuard(ConvergeKitError):
    pass


class ResourceActionError(ConvergeKitError):
    kind = ErrorKind.RESOURCE_ACTION_FAILED


class InvalidAttributeValue(ConvergeKitError):
    kind = ErrorKind.INVALID_ATTRIBUTE_VALUE


class ShellCommandFailed(ResourceActionError):
    kind = ErrorKind.SHELL_COMMAND_FAILED

    def __init__(
        self,
        command: str,
        exit_status: int,
        expected: Sequence[int],
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.command = command
        self.exit_status = exit_status
        self.expected = list(expected)
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f"Expected process to exit with {self.expected}, but received '{exit_status}'"
            f" (command: {command})"
        )


class CommandTimedOut(ResourceActionError):
    kind = ErrorKind.COMMAND_TIMEOUT

    def __init__(self, command: str, timeout: float) -> None:
        self.command = command
        self.timeout = timeout
        super().__init__(f"Command timed out after {timeout}s (command: {command})")


def error_kind_of(exc: BaseException) -> Optional[ErrorKind]:
    if isinstance(exc, ConvergeKitError):
        return exc.kind
    return None
