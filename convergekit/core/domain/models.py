"""Domain models for guard sources and resource placement.

Responsibilities:
  - Define value objects for nodes, provenance, and guard statements.
  - Define the guard condition source union consumed by Conditional.

Invariants:
  - Models are immutable containers; statements carry no behavior.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Union


@dataclass(frozen=True)
class Node:
    name: str
    platform: str = "linux"
    platform_family: str = "linux"
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)


@dataclass(frozen=True)
class SourceLocation:
    file: str
    line: Optional[int] = None

    def __str__(self) -> str:
        if self.line is None:
            return self.file
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class SetAttribute:
    name: str
    value: Any


@dataclass(frozen=True)
class InvokeCapability:
    name: str
    args: tuple[Any, ...] = ()


GuardStatement = Union[SetAttribute, InvokeCapability]


@dataclass(frozen=True)
class GuardBlock:
    """Ordered statements applied to an explicit resource handle."""
    statements: tuple[GuardStatement, ...] = ()

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Any]) -> GuardBlock:
        return cls(tuple(SetAttribute(name, value) for name, value in attributes.items()))


@dataclass(frozen=True)
class CommandGuard:
    command: str


@dataclass(frozen=True)
class BlockGuard:
    block: Callable[[], Any]


GuardConditionSource = Union[CommandGuard, BlockGuard]
