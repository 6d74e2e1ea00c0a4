from __future__ import annotations

from typing import Optional

from ..domain.errors import InvalidNode, UnknownResourceType
from ..resource.base import Resource
from ..resource.registry import ResourceRegistry

ANONYMOUS_RESOURCE_NAME = "anonymous"


class AnonymousResourceFactory:
    """Builds throwaway resources bound to a parent's node.

    Each resource gets its own isolated run context, so converging it can never
    touch the parent run's events or change counters.
    """

    def __init__(self, registry: Optional[ResourceRegistry] = None) -> None:
        self._registry = registry

    def create(self, parent: Optional[Resource], resource_type: str) -> Resource:
        if parent is None or parent.run_context is None or parent.node is None:
            raise InvalidNode("Node for anonymous resource must not be None")
        context = parent.run_context

        registry = self._registry or context.registry
        resource_class = registry.resolve(resource_type, parent.node) if registry else None
        if resource_class is None:
            raise UnknownResourceType(resource_type, parent.node.platform)

        return resource_class(ANONYMOUS_RESOURCE_NAME, context.isolated())


__all__ = ["ANONYMOUS_RESOURCE_NAME", "AnonymousResourceFactory"]
