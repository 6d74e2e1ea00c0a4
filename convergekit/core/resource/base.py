"""Resource base class with declared attributes, actions, and guards.

Responsibilities:
  - Declare the attributes each resource class supports (its capabilities).
  - Validate attribute writes against the declared types.
  - Run one action, honoring only_if/not_if guards, and record `updated`.

Must not:
  - Implement provider logic beyond the action_<name> hooks of subclasses.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..domain.errors import ConvergeKitError, InvalidAttributeValue
from ..domain.models import Node, SourceLocation
from ..guard.conditional import Conditional
from .ports.command_runner_port import CommandRunner
from .run_context import RunContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttributeSpec:
    default: Any = None
    kind_of: tuple[type, ...] = ()

    def initial_value(self) -> Any:
        return copy.deepcopy(self.default)

    def accepts(self, value: Any) -> bool:
        if value is None or not self.kind_of:
            return True
        return isinstance(value, self.kind_of)


class Resource:
    resource_name = "resource"
    ATTRIBUTES: dict[str, AttributeSpec] = {}
    CAPABILITIES: tuple[str, ...] = ("set_action", "only_if", "not_if")
    ACTIONS: tuple[str, ...] = ("nothing",)
    DEFAULT_ACTION = "nothing"
    # Attribute names copied into anonymous guard resources.
    guard_inherited_attributes: tuple[str, ...] = ()

    def __init__(self, name: str, run_context: Optional[RunContext] = None) -> None:
        self.name = name
        self.run_context = run_context
        self.action = self.DEFAULT_ACTION
        self.updated: Optional[bool] = None
        self.source_line: Optional[SourceLocation] = None
        self.guards: list[Conditional] = []
        self._values = {attr: spec.initial_value() for attr, spec in self.attribute_specs().items()}

    def __str__(self) -> str:
        return f"{self.resource_name}[{self.name}]"

    @classmethod
    def attribute_specs(cls) -> dict[str, AttributeSpec]:
        specs: dict[str, AttributeSpec] = {}
        for klass in reversed(cls.__mro__):
            specs.update(vars(klass).get("ATTRIBUTES", {}))
        return specs

    @classmethod
    def supports(cls, name: str) -> bool:
        return name in cls.attribute_specs()

    @classmethod
    def has_capability(cls, name: str) -> bool:
        return name in cls.CAPABILITIES

    @property
    def node(self) -> Optional[Node]:
        if self.run_context is None:
            return None
        return self.run_context.node

    @property
    def runner(self) -> CommandRunner:
        if self.run_context is None or self.run_context.runner is None:
            raise ConvergeKitError(f"{self} has no command runner")
        return self.run_context.runner

    def get(self, name: str) -> Any:
        if not self.supports(name):
            raise AttributeError(f"{self.resource_name} has no attribute '{name}'")
        return self._values[name]

    def set(self, name: str, value: Any) -> None:
        specs = self.attribute_specs()
        if name not in specs:
            raise AttributeError(f"{self.resource_name} has no attribute '{name}'")
        spec = specs[name]
        if not spec.accepts(value):
            expected = ", ".join(t.__name__ for t in spec.kind_of)
            raise InvalidAttributeValue(
                f"Option {name} must be a kind of [{expected}]! You passed {value!r}."
            )
        self._values[name] = value

    def invoke(self, name: str, *args: Any) -> Any:
        if not self.has_capability(name):
            raise AttributeError(f"{self.resource_name} has no capability '{name}'")
        return getattr(self, name)(*args)

    def set_action(self, action: str) -> None:
        if action not in self.ACTIONS:
            allowed = ", ".join(self.ACTIONS)
            raise ValueError(f"{self} does not support action '{action}'. Allowed: {allowed}")
        self.action = action

    def only_if(
        self,
        command: Optional[str] = None,
        block: Optional[Callable[[], Any]] = None,
        **opts: Any,
    ) -> None:
        self.guards.append(Conditional.only_if(command, block, **opts))

    def not_if(
        self,
        command: Optional[str] = None,
        block: Optional[Callable[[], Any]] = None,
        **opts: Any,
    ) -> None:
        self.guards.append(Conditional.not_if(command, block, **opts))

    def should_skip(self, action: str) -> bool:
        runner = self.run_context.runner if self.run_context is not None else None
        for guard in self.guards:
            if not guard.continue_(runner):
                logger.info("Skipping %s action %s (%s)", self, action, guard.description)
                return True
        return False

    def run_action(self, action: Optional[str] = None) -> None:
        action = action or self.action
        if action not in self.ACTIONS:
            allowed = ", ".join(self.ACTIONS)
            raise ValueError(f"{self} does not support action '{action}'. Allowed: {allowed}")

        self.updated = False
        if self.should_skip(action):
            return

        handler = getattr(self, f"action_{action}")
        if handler():
            self.updated = True
            if self.run_context is not None:
                self.run_context.note_updated(self)

    def action_nothing(self) -> bool:
        return False
