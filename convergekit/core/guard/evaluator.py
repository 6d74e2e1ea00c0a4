"""Guard evaluation against a single anonymous resource.

Responsibilities:
  - Build a throwaway resource of the requested type on the parent's node.
  - Copy inheritable attributes, apply the guard block, converge once.
  - Classify the outcome into GuardResult, absorbing only handled error kinds.

Inputs/Outputs:
  - Inputs: parent resource, resource type symbol, handled ErrorKind set,
    optional SourceLocation, and a GuardBlock or a callable taking the resource.
  - Outputs: GuardResult; unhandled failures propagate unchanged.

Invariants:
  - An evaluator converges its anonymous resource exactly once.
  - The parent resource is only read.
  - No retries and no caching; every evaluation builds a fresh resource.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from ..domain.enums import ErrorKind, GuardResult
from ..domain.errors import ConvergeKitError, MalformedGuard, error_kind_of
from ..domain.models import GuardBlock, InvokeCapability, SetAttribute, SourceLocation
from ..resource.base import Resource
from .anonymous import AnonymousResourceFactory
from .inheritance import propagate

logger = logging.getLogger(__name__)

GuardBlockSource = Union[GuardBlock, Callable[[Resource], Any]]

_DEBUG_FN: Callable[[str], None] | None = None


def set_guard_debug(fn: Callable[[str], None] | None) -> None:
    global _DEBUG_FN
    _DEBUG_FN = fn


def is_well_formed(block: Any, *args: Any) -> bool:
    """A GuardBlock, or a callable taking exactly the resource handle."""
    if args:
        return False
    if isinstance(block, GuardBlock):
        return True
    if not callable(block):
        return False
    try:
        inspect.signature(block).bind(None)
    except (TypeError, ValueError):
        return False
    return True


def apply_block(resource: Resource, block: GuardBlockSource) -> None:
    if not isinstance(block, GuardBlock):
        block(resource)
        return

    for statement in block.statements:
        if isinstance(statement, SetAttribute):
            if not resource.supports(statement.name):
                raise MalformedGuard(
                    f"{resource.resource_name} has no attribute '{statement.name}'"
                )
            resource.set(statement.name, statement.value)
        elif isinstance(statement, InvokeCapability):
            if not resource.has_capability(statement.name):
                raise MalformedGuard(
                    f"{resource.resource_name} has no capability '{statement.name}'"
                )
            resource.invoke(statement.name, *statement.args)
        else:
            raise MalformedGuard(f"Unsupported guard statement: {statement!r}")


class GuardEvaluator:
    def __init__(
        self,
        resource: Resource,
        parent: Resource,
        handled_kinds: Optional[Iterable[ErrorKind]],
        source_location: Optional[SourceLocation],
        block: GuardBlockSource,
    ) -> None:
        self._resource = resource
        self._block = block
        self._handled_kinds = frozenset(handled_kinds or ())
        self._evaluated = False
        self.inherited = propagate(parent, resource, parent.guard_inherited_attributes)
        if source_location is not None:
            resource.source_line = source_location

    @property
    def resource(self) -> Resource:
        return self._resource

    @classmethod
    def from_block(
        cls,
        parent: Optional[Resource],
        resource_type: str,
        handled_kinds: Optional[Iterable[ErrorKind]],
        source_location: Optional[SourceLocation],
        block: Any,
        *args: Any,
        factory: Optional[AnonymousResourceFactory] = None,
    ) -> GuardEvaluator:
        if not is_well_formed(block, *args):
            raise MalformedGuard("A block must be specified with no arguments")
        resource = (factory or AnonymousResourceFactory()).create(parent, resource_type)
        return cls(resource, parent, handled_kinds, source_location, block)

    @classmethod
    def from_attributes(
        cls,
        parent: Optional[Resource],
        resource_type: str,
        handled_kinds: Optional[Iterable[ErrorKind]],
        attributes: Mapping[str, Any],
        source_location: Optional[SourceLocation] = None,
    ) -> GuardEvaluator:
        block = GuardBlock.from_attributes(attributes)
        return cls.from_block(parent, resource_type, handled_kinds, source_location, block)

    def evaluate_action(self, action: Optional[str] = None) -> GuardResult:
        if self._evaluated:
            raise RuntimeError(f"{self._resource} was already converged by this evaluator")
        self._evaluated = True

        apply_block(self._resource, self._block)
        run_action = action or self._resource.action

        try:
            self._resource.run_action(run_action)
        except ConvergeKitError as exc:
            kind = error_kind_of(exc)
            if kind is None or kind not in self._handled_kinds:
                raise
            logger.debug("Guard %s absorbed %s: %s", self._resource, kind.value, exc)
            result = GuardResult.UNDETERMINED
        else:
            result = GuardResult.from_updated(self._resource.updated)

        if _DEBUG_FN is not None:
            _DEBUG_FN(
                "GUARD_EVAL "
                f"resource={self._resource} action={run_action} "
                f"inherited={self.inherited} source={self._resource.source_line} "
                f"result={result.value}"
            )
        return result


def evaluate_guard(
    parent: Optional[Resource],
    resource_type: str,
    handled_kinds: Optional[Iterable[ErrorKind]],
    source_location: Optional[SourceLocation],
    block: Any,
    *args: Any,
    action: Optional[str] = None,
) -> GuardResult:
    evaluator = GuardEvaluator.from_block(
        parent, resource_type, handled_kinds, source_location, block, *args
    )
    return evaluator.evaluate_action(action)


def evaluate_guard_attributes(
    parent: Optional[Resource],
    resource_type: str,
    handled_kinds: Optional[Iterable[ErrorKind]],
    attributes: Mapping[str, Any],
    action: Optional[str] = None,
) -> GuardResult:
    evaluator = GuardEvaluator.from_attributes(parent, resource_type, handled_kinds, attributes)
    return evaluator.evaluate_action(action)


def guard_callable(
    parent: Resource,
    resource_type: str,
    handled_kinds: Optional[Iterable[ErrorKind]],
    attributes: Mapping[str, Any],
) -> Callable[[], GuardResult]:
    """Zero-argument guard that runs a fresh evaluation on every call."""
    frozen_kinds = frozenset(handled_kinds or ())
    frozen_attributes = dict(attributes)

    def _guard() -> GuardResult:
        return evaluate_guard_attributes(parent, resource_type, frozen_kinds, frozen_attributes)

    return _guard
