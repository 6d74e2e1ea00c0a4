from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any, Iterable

if TYPE_CHECKING:
    from ..resource.base import Resource


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    return False


def propagate(parent: Resource, child: Resource, names: Iterable[str]) -> list[str]:
    """Copy inheritable attribute values from ``parent`` into ``child``.

    An attribute is copied only when both resource classes declare it and the
    parent's value is non-empty; the parent's value then replaces whatever the
    child holds. Names either side does not declare are skipped silently.
    Values are deep-copied so the child never shares a container with
    ``parent``, which is only read. Returns the names that were written.
    """
    copied: list[str] = []
    for name in names:
        if not parent.supports(name) or not child.supports(name):
            continue
        parent_value = parent.get(name)
        if is_empty(parent_value):
            continue
        child.set(name, copy.deepcopy(parent_value))
        copied.append(name)
    return copied
