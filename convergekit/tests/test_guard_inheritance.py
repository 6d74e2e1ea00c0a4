"""Tests for guard attribute inheritance."""

from __future__ import annotations

import pytest

from convergekit.core.guard.inheritance import is_empty, propagate
from convergekit.core.resource.base import AttributeSpec, Resource
from convergekit.core.resource.script import Bash, Script


class _UserOnly(Resource):
    resource_name = "user_only"
    ATTRIBUTES = {"user": AttributeSpec(kind_of=(str,))}


def _snapshot(resource: Resource) -> dict:
    return {name: resource.get(name) for name in resource.attribute_specs()}


def test_parent_value_copied_into_empty_child() -> None:
    parent = Script("parent")
    parent.set("user", "alice")
    child = Bash("anonymous")

    copied = propagate(parent, child, ["user"])

    assert copied == ["user"]
    assert child.get("user") == "alice"


def test_parent_value_overwrites_child_default() -> None:
    parent = Script("parent")
    parent.set("cwd", "/srv/app")
    child = Bash("anonymous")
    child.set("cwd", "/tmp")

    propagate(parent, child, ["cwd"])

    assert child.get("cwd") == "/srv/app"


def test_empty_parent_value_keeps_child_value() -> None:
    parent = Script("parent")
    child = Bash("anonymous")
    child.set("cwd", "/tmp")

    copied = propagate(parent, child, ["cwd"])

    assert copied == []
    assert child.get("cwd") == "/tmp"


def test_missing_capability_on_either_side_is_noop() -> None:
    parent = Script("parent")
    parent.set("cwd", "/srv/app")
    parent.set("user", "alice")
    child = _UserOnly("anonymous")
    parent_before = _snapshot(parent)

    copied = propagate(parent, child, ["cwd", "code", "nonexistent"])

    assert copied == []
    assert _snapshot(child) == {"user": None}
    assert _snapshot(parent) == parent_before

    reverse_child = Bash("anonymous")
    reverse_before = _snapshot(reverse_child)
    propagate(_UserOnly("parent"), reverse_child, ["cwd"])
    assert _snapshot(reverse_child) == reverse_before


def test_names_are_processed_in_order_and_parent_untouched() -> None:
    parent = Script("parent")
    parent.set("environment", {"LANG": "C"})
    parent.set("user", "alice")
    parent.set("umask", "022")
    child = Bash("anonymous")
    parent_before = _snapshot(parent)

    copied = propagate(parent, child, ["umask", "user", "environment", "group"])

    assert copied == ["umask", "user", "environment"]
    assert child.get("environment") == {"LANG": "C"}
    assert _snapshot(parent) == parent_before


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, True),
        ("", True),
        ([], True),
        ({}, True),
        ("alice", False),
        (0, False),
        (False, False),
        ([0], False),
    ],
)
def test_is_empty(value, expected) -> None:
    assert is_empty(value) is expected
