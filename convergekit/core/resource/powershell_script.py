from __future__ import annotations

from typing import Any, Callable, Optional

from ..guard.interpreter_invocation import (
    DEFAULT_HOST_EXECUTABLE,
    command_flags,
    guard_command,
    normalize_exit_status,
)
from .base import AttributeSpec
from .script import Script


class PowershellScript(Script):
    """Script resource hosted by powershell.exe.

    Raw guard commands are prefixed with the host executable and its fixed
    flags; the action body is wrapped so the last external exit code survives.
    """

    resource_name = "powershell_script"
    ATTRIBUTES = {
        "interpreter": AttributeSpec(default=DEFAULT_HOST_EXECUTABLE, kind_of=(str,)),
    }
    SCRIPT_SUFFIX = ".ps1"

    def command_flags(self) -> str:
        return command_flags()

    def guard_command(self, command: Optional[str]) -> Optional[str]:
        return guard_command(command, self.get("interpreter"))

    def only_if(
        self,
        command: Optional[str] = None,
        block: Optional[Callable[[], Any]] = None,
        **opts: Any,
    ) -> None:
        super().only_if(self.guard_command(command), block, **opts)

    def not_if(
        self,
        command: Optional[str] = None,
        block: Optional[Callable[[], Any]] = None,
        **opts: Any,
    ) -> None:
        super().not_if(self.guard_command(command), block, **opts)

    def script_body(self) -> str:
        return normalize_exit_status(self.get("code")) or ""

    def interpreter_command(self, script_path: str) -> str:
        parts = [
            self.get("interpreter"),
            self.get("flags"),
            self.command_flags(),
            f"\"& '{script_path}'\"",
        ]
        return " ".join(part for part in parts if part)
