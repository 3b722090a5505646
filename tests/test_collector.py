"""Tests for the configuration dependency collector."""

from __future__ import annotations

from typing import List, Optional

import pytest

from dependency_snapshot.errors import InvalidIdentifier
from dependency_snapshot.extraction.collector import (
    ConfigurationDependencyCollector, collect)
from dependency_snapshot.models import (Component, ComponentIdentifier,
                                        DependencyResult, ModuleVersion,
                                        Relationship)


def _module(name: str, group: str = "org.example", version: str = "1.0") -> Component:
    return Component(
        id=ComponentIdentifier(f"{group}:{name}:{version}"),
        module_version=ModuleVersion(group, name, version),
    )


def _root() -> Component:
    return Component(id=ComponentIdentifier("project :app", project_path=":app"))


def test_diamond_keeps_root_child_direct() -> None:
    root, a, b = _root(), _module("a"), _module("b")
    root.depends_on(a).depends_on(b)
    a.depends_on(b)

    resolved = collect(root)

    assert list(resolved) == ["org.example:a:1.0", "org.example:b:1.0"]
    record_a = resolved["org.example:a:1.0"]
    record_b = resolved["org.example:b:1.0"]
    assert record_a.relationship is Relationship.DIRECT
    assert record_a.dependencies == ("org.example:b:1.0",)
    assert record_b.relationship is Relationship.DIRECT
    assert record_b.dependencies == ()


def test_root_child_listed_after_longer_path_is_still_direct() -> None:
    root, a, b, c = _root(), _module("a"), _module("b"), _module("c")
    a.depends_on(b).depends_on(c)
    root.depends_on(a).depends_on(c)

    resolved = collect(root)

    assert resolved["org.example:b:1.0"].relationship is Relationship.INDIRECT
    assert resolved["org.example:c:1.0"].relationship is Relationship.DIRECT


def test_transitive_only_components_are_indirect() -> None:
    root, a, b, c = _root(), _module("a"), _module("b"), _module("c")
    root.depends_on(a)
    a.depends_on(b)
    b.depends_on(c)

    resolved = collect(root)

    assert resolved["org.example:a:1.0"].relationship is Relationship.DIRECT
    assert resolved["org.example:b:1.0"].relationship is Relationship.INDIRECT
    assert resolved["org.example:c:1.0"].relationship is Relationship.INDIRECT


def test_root_never_appears_in_its_own_table() -> None:
    root, a = _root(), _module("a")
    root.depends_on(a)
    a.depends_on(root)

    resolved = collect(root)

    assert list(resolved) == ["org.example:a:1.0"]
    assert resolved["org.example:a:1.0"].dependencies == ("project :app",)


def test_cycle_terminates_and_visits_each_component_once() -> None:
    root, a, b = _root(), _module("a"), _module("b")
    root.depends_on(a)
    a.depends_on(b)
    b.depends_on(a)

    resolved = collect(root)

    assert set(resolved) == {"org.example:a:1.0", "org.example:b:1.0"}


def test_shared_component_edges_are_computed_once() -> None:
    root = _root()
    a, c, d, e = _module("a"), _module("c"), _module("d"), _module("e")
    root.depends_on(a).depends_on(c)
    a.depends_on(d)
    c.depends_on(d)
    d.depends_on(e)
    calls: List[str] = []

    def edges_of(component: Component) -> List[Component]:
        calls.append(component.id.display_name)
        return [edge.selected for edge in component.dependencies if edge.selected]

    resolved = collect(root, edges_of=edges_of)

    assert resolved["org.example:d:1.0"].dependencies == ("org.example:e:1.0",)
    assert calls.count("org.example:d:1.0") == 1
    assert len(resolved) == 4


def test_unresolved_edges_are_ignored() -> None:
    root, a = _root(), _module("a")
    root.depends_on(a)
    a.dependencies.append(DependencyResult(requested="org.missing:x:1.0"))

    resolved = collect(root)

    assert resolved["org.example:a:1.0"].dependencies == ()


def test_repository_url_is_used_for_identifier() -> None:
    root, a, b = _root(), _module("a"), _module("b")
    root.depends_on(a).depends_on(b)
    urls = {"org.example:a:1.0": "https://repo.example/maven2"}

    def lookup(component: Component) -> Optional[str]:
        return urls.get(component.id.display_name)

    resolved = collect(root, lookup)

    assert resolved["org.example:a:1.0"].package_url == (
        "pkg:maven/org.example/a@1.0"
        "?repository_url=https%3A%2F%2Frepo.example%2Fmaven2"
    )
    assert resolved["org.example:b:1.0"].package_url == (
        "pkg:maven/org.example/b@1.0"
    )


def test_identifier_failures_propagate() -> None:
    root = _root()
    root.depends_on(Component(id=ComponentIdentifier("project :lib", ":lib")))

    with pytest.raises(InvalidIdentifier):
        collect(root)


def test_collector_returns_independent_copy() -> None:
    root, a = _root(), _module("a")
    root.depends_on(a)
    collector = ConfigurationDependencyCollector(root)

    first = collector.walk_component_graph()
    first.clear()

    assert list(collector.walk_component_graph()) == ["org.example:a:1.0"]


def test_root_without_dependencies_yields_empty_table() -> None:
    assert collect(_root()) == {}
