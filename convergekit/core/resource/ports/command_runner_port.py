from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol


@dataclass(frozen=True)
class CommandResult:
    exit_status: Optional[int]
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0 and not self.timed_out


class CommandRunner(Protocol):
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
        ...
