from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from ..domain.models import Node

if TYPE_CHECKING:
    from .base import Resource


class ResourceRegistry:
    """Maps resource type symbols to resource classes per platform family.

    Platform-specific registrations win over generic ones for the same symbol.
    """

    def __init__(self) -> None:
        self._registry: Dict[str, List[Tuple[Optional[frozenset[str]], type[Resource]]]] = {}

    def register(
        self,
        resource_type: str,
        resource_class: type[Resource],
        platform_families: Optional[Iterable[str]] = None,
    ) -> None:
        families = frozenset(platform_families) if platform_families is not None else None
        self._registry.setdefault(resource_type, []).append((families, resource_class))

    def resolve(self, resource_type: str, node: Node) -> Optional[type[Resource]]:
        generic: Optional[type[Resource]] = None
        for families, resource_class in self._registry.get(resource_type, []):
            if families is None:
                generic = generic or resource_class
            elif node.platform_family in families or node.platform in families:
                return resource_class
        return generic

    def resource_types(self) -> list[str]:
        return sorted(self._registry)


__all__ = ["ResourceRegistry"]
