from .build_runtime import build_parent_resource, build_run_context

__all__ = [
    "build_parent_resource",
    "build_run_context",
]
"""Factory helpers for building run contexts and guarded resources."""
