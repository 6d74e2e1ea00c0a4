"""Invocation flags and exit-status normalization for the PowerShell host.

Unless a script calls exit explicitly, powershell.exe reports only 0 or 1.
To surface the exit code of the last external tool, scripts are wrapped so
that $LASTEXITCODE is reset first and inspected afterwards: exit 0 when $? is
true, else the last external exit code when non-zero, else 1.

Guards use the plain flags and rely on the process exit code directly; only
action bodies are wrapped.
"""

from __future__ import annotations

from typing import Optional

DEFAULT_HOST_EXECUTABLE = "powershell.exe"

EXIT_STATUS_RESET_SCRIPT = "$LASTEXITCODE=0\n"
EXIT_STATUS_NORMALIZATION_SCRIPT = (
    "\nif ($? -eq $true) {exit 0} "
    "elseif ( $LASTEXITCODE -ne 0) {exit $LASTEXITCODE} "
    "else { exit 1 }"
)

_INVOCATION_FLAGS = (
    "-NoLogo",
    "-NonInteractive",
    "-NoProfile",
    "-ExecutionPolicy RemoteSigned",
    # powershell.exe can hang when stdin is redirected.
    "-InputFormat None",
    "-Command",
)


def build_invocation_flags() -> list[str]:
    return list(_INVOCATION_FLAGS)


def command_flags() -> str:
    return " ".join(_INVOCATION_FLAGS)


def normalize_exit_status(code: Optional[str]) -> Optional[str]:
    if code is None:
        return None
    return EXIT_STATUS_RESET_SCRIPT + code + EXIT_STATUS_NORMALIZATION_SCRIPT


def guard_command(command: Optional[str], executable: str = DEFAULT_HOST_EXECUTABLE) -> Optional[str]:
    if command is None:
        return None
    return f"{executable} {command_flags()} {command}"
