"""Tests for anonymous resource construction."""

from __future__ import annotations

import pytest

from convergekit.core.domain.errors import InvalidNode, UnknownResourceType
from convergekit.core.domain.models import Node
from convergekit.core.guard.anonymous import ANONYMOUS_RESOURCE_NAME, AnonymousResourceFactory
from convergekit.core.resource.catalog import build_default_registry
from convergekit.core.resource.ports.command_runner_port import CommandResult
from convergekit.core.resource.powershell_script import PowershellScript
from convergekit.core.resource.registry import ResourceRegistry
from convergekit.core.resource.run_context import RunContext
from convergekit.core.resource.script import Bash, Script


class _FakeRunner:
    def __init__(self, exit_status: int = 0) -> None:
        self.exit_status = exit_status
        self.calls: list[str] = []

    def run(self, command, **kwargs) -> CommandResult:
        self.calls.append(command)
        return CommandResult(exit_status=self.exit_status)


def _parent(node: Node | None = None, runner=None) -> Script:
    context = RunContext(
        node=node or Node(name="web01"),
        registry=build_default_registry(),
        runner=runner,
    )
    context.events.append("parent event")
    context.updated_resources = 4
    return Script("parent", context)


def test_create_builds_named_resource_on_parent_node() -> None:
    parent = _parent()

    resource = AnonymousResourceFactory().create(parent, "bash")

    assert isinstance(resource, Bash)
    assert resource.name == ANONYMOUS_RESOURCE_NAME
    assert resource.node is parent.node


def test_create_uses_isolated_run_context() -> None:
    runner = _FakeRunner()
    parent = _parent(runner=runner)

    resource = AnonymousResourceFactory().create(parent, "bash")

    assert resource.run_context is not parent.run_context
    assert resource.run_context.events == []
    assert resource.run_context.updated_resources == 0
    assert resource.run_context.runner is runner
    assert resource.run_context.registry is parent.run_context.registry


def test_converging_anonymous_resource_leaves_parent_bookkeeping_alone() -> None:
    parent = _parent(runner=_FakeRunner(exit_status=0))
    resource = AnonymousResourceFactory().create(parent, "execute")
    resource.set("command", "true")

    resource.run_action()

    assert resource.updated is True
    assert resource.run_context.updated_resources == 1
    assert parent.run_context.updated_resources == 4
    assert parent.run_context.events == ["parent event"]


def test_create_without_parent_raises_invalid_node() -> None:
    with pytest.raises(InvalidNode):
        AnonymousResourceFactory().create(None, "bash")


def test_create_without_node_raises_invalid_node() -> None:
    no_context = Script("parent")
    with pytest.raises(InvalidNode):
        AnonymousResourceFactory().create(no_context, "bash")

    no_node = Script("parent", RunContext(node=None, registry=build_default_registry()))
    with pytest.raises(InvalidNode):
        AnonymousResourceFactory().create(no_node, "bash")


def test_unknown_symbol_raises_unknown_resource_type() -> None:
    parent = _parent()
    with pytest.raises(UnknownResourceType) as excinfo:
        AnonymousResourceFactory().create(parent, "template")
    assert excinfo.value.resource_type == "template"


def test_platform_specific_type_resolves_only_on_its_platform() -> None:
    linux_parent = _parent(Node(name="web01", platform="ubuntu", platform_family="debian"))
    with pytest.raises(UnknownResourceType):
        AnonymousResourceFactory().create(linux_parent, "powershell_script")

    windows_parent = _parent(Node(name="win01", platform="windows", platform_family="windows"))
    resource = AnonymousResourceFactory().create(windows_parent, "powershell_script")
    assert isinstance(resource, PowershellScript)


def test_explicit_registry_overrides_context_registry() -> None:
    registry = ResourceRegistry()
    registry.register("probe", Bash)
    parent = _parent()

    resource = AnonymousResourceFactory(registry).create(parent, "probe")

    assert isinstance(resource, Bash)
    with pytest.raises(UnknownResourceType):
        AnonymousResourceFactory(registry).create(parent, "bash")
