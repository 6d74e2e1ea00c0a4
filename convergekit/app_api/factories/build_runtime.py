"""Construct a wired run context and the resource whose guards are checked.

Responsibilities:
  - Assemble node, resource registry, and command runner into a RunContext.
  - Build a parent resource from GuardConfig.
Must not:
  - Implement guard logic; composition only.
"""

from __future__ import annotations

from typing import Optional

from convergekit.app_api.guard_config import GuardConfig
from convergekit.core.domain.errors import InvalidNode, UnknownResourceType
from convergekit.core.domain.models import Node
from convergekit.core.resource.base import Resource
from convergekit.core.resource.catalog import default_resource_registry
from convergekit.core.resource.ports.command_runner_port import CommandRunner
from convergekit.core.resource.registry import ResourceRegistry
from convergekit.core.resource.run_context import RunContext
from convergekit.infra.node.local_node import detect_local_node
from convergekit.infra.shell.subprocess_runner import SubprocessCommandRunner


def build_run_context(
    node: Optional[Node] = None,
    registry: Optional[ResourceRegistry] = None,
    runner: Optional[CommandRunner] = None,
) -> RunContext:
    """Composition root: node, registry, and runner default to the local machine."""
    return RunContext(
        node=node or detect_local_node(),
        registry=registry or default_resource_registry,
        runner=runner or SubprocessCommandRunner(),
    )


def build_parent_resource(config: GuardConfig, run_context: RunContext, name: str = "guard_check") -> Resource:
    if run_context.node is None:
        raise InvalidNode("Run context has no node")
    resource_class = None
    if run_context.registry is not None:
        resource_class = run_context.registry.resolve(config.resource_type, run_context.node)
    if resource_class is None:
        raise UnknownResourceType(config.resource_type, run_context.node.platform)

    resource = resource_class(name, run_context)
    values = {
        "guard_interpreter": config.guard_interpreter,
        "cwd": config.cwd,
        "user": config.user,
        "group": config.group,
        "umask": config.umask,
        "timeout": config.timeout,
        "environment": dict(config.environment) or None,
    }
    for attribute, value in values.items():
        if value is not None and resource.supports(attribute):
            resource.set(attribute, value)
    return resource
