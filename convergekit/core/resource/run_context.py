"""Per-run bookkeeping shared by the resources of one convergence run.

Invariants:
  - An isolated context shares only the node and the stateless services
    (registry, command runner); events and change counters start empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from ..domain.models import Node
from .ports.command_runner_port import CommandRunner

if TYPE_CHECKING:
    from .base import Resource
    from .registry import ResourceRegistry


@dataclass
class RunContext:
    node: Optional[Node]
    registry: Optional[ResourceRegistry] = None
    runner: Optional[CommandRunner] = None
    events: list[str] = field(default_factory=list)
    updated_resources: int = 0

    def note_updated(self, resource: Resource) -> None:
        self.updated_resources += 1
        self.events.append(f"{resource}: updated")

    def isolated(self) -> RunContext:
        return RunContext(node=self.node, registry=self.registry, runner=self.runner)
