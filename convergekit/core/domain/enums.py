"""Domain enums for guard evaluation and error classification.

Responsibilities:
  - Define the tri-state GuardResult produced by guard evaluation.
  - Define ErrorKind tags used to decide which action failures a guard absorbs.
  - Provide stable error categories and diagnostic metadata.

Invariants:
  - Enum values must remain stable; they appear in logs and CLI output.
  - ErrorKind metadata must be complete and deterministic.
"""

from __future__ import annotations

from enum import Enum


class GuardResult(Enum):
    TRUE = "TRUE"
    FALSE = "FALSE"
    UNDETERMINED = "UNDETERMINED"

    @classmethod
    def from_updated(cls, updated: bool | None) -> GuardResult:
        return cls.TRUE if updated else cls.FALSE

    def as_bool(self) -> bool | None:
        if self is GuardResult.UNDETERMINED:
            return None
        return self is GuardResult.TRUE


class GuardKind(Enum):
    ONLY_IF = "only_if"
    NOT_IF = "not_if"


class ErrorCategory(Enum):
    COMMAND = "COMMAND"
    RESOURCE = "RESOURCE"


# Stable identifiers for action failures; handled-kind sets are built from these.
class ErrorKind(Enum):
    SHELL_COMMAND_FAILED = "SHELL_COMMAND_FAILED"
    COMMAND_TIMEOUT = "COMMAND_TIMEOUT"
    INVALID_ATTRIBUTE_VALUE = "INVALID_ATTRIBUTE_VALUE"
    RESOURCE_ACTION_FAILED = "RESOURCE_ACTION_FAILED"


ERROR_KIND_METADATA: dict[ErrorKind, dict[str, object]] = {
    ErrorKind.SHELL_COMMAND_FAILED: {
        "category": ErrorCategory.COMMAND,
        "message": "External command exited with an unexpected status.",
    },
    ErrorKind.COMMAND_TIMEOUT: {
        "category": ErrorCategory.COMMAND,
        "message": "External command did not finish before its timeout.",
    },
    ErrorKind.INVALID_ATTRIBUTE_VALUE: {
        "category": ErrorCategory.RESOURCE,
        "message": "Attribute value does not match the declared type.",
    },
    ErrorKind.RESOURCE_ACTION_FAILED: {
        "category": ErrorCategory.RESOURCE,
        "message": "Resource action failed.",
    },
}


_missing = [kind for kind in ErrorKind if kind not in ERROR_KIND_METADATA]
if _missing:
    raise RuntimeError(f"Missing ERROR_KIND_METADATA for: {[m.value for m in _missing]}")

_extra = [k for k in ERROR_KIND_METADATA.keys() if k not in set(ErrorKind)]
if _extra:
    raise RuntimeError(f"Extra ERROR_KIND_METADATA keys: {[e.value for e in _extra]}")
