"""
Dependency Snapshot Repository
Introductory remarks: This module is part of the Dependency Snapshot codebase.

Collect the dependency table of a single resolved configuration.

The root's own resolved dependencies are recorded as ``direct`` before any
transitive component is visited, so a component that the root depends on
is always reported as direct even when it is also reachable through other
dependencies. Everything else reachable from the root is ``indirect``.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional

from dependency_snapshot.extraction.purl import build_identifier
from dependency_snapshot.models.graph import Component, resolved_dependencies
from dependency_snapshot.models.manifest import DependencyRecord, Relationship

_LOGGER = logging.getLogger(__name__)

RepositoryUrlLookupFn = Callable[[Component], Optional[str]]
EdgesFn = Callable[[Component], List[Component]]


def _no_repository(component: Component) -> Optional[str]:
    return None


class ConfigurationDependencyCollector:
    """Walk the graph below ``root_component`` and build its table.

    Each collector owns its visited table; use one instance per
    configuration.
    """

    def __init__(
        self,
        root_component: Component,
        repository_url_lookup: Optional[RepositoryUrlLookupFn] = None,
        *,
        edges_of: EdgesFn = resolved_dependencies,
    ) -> None:
        self._root = root_component
        self._repository_url_lookup = repository_url_lookup or _no_repository
        self._edges_of = edges_of
        self._dependencies: Dict[str, DependencyRecord] = {}

    def walk_component_graph(self) -> Dict[str, DependencyRecord]:
        """Return the dependency table keyed by component display name."""
        frontier: Deque[List[Component]] = deque()

        for component in self._edges_of(self._root):
            children = self._visit(component, Relationship.DIRECT)
            if children is not None:
                frontier.append(children)

        while frontier:
            for component in frontier.popleft():
                children = self._visit(component, Relationship.INDIRECT)
                if children is not None:
                    frontier.append(children)

        _LOGGER.debug(
            "Collected %d dependencies below %s",
            len(self._dependencies),
            self._root.id.display_name,
        )
        return dict(self._dependencies)

    def _visit(
        self, component: Component, relationship: Relationship
    ) -> Optional[List[Component]]:
        """Record ``component`` on first visit and return its children.

        Returns None when the component is the root or was already recorded.
        """
        component_id = component.id.display_name
        if component.id == self._root.id or component_id in self._dependencies:
            return None

        children = list(self._edges_of(component))
        repository_url = self._repository_url_lookup(component)
        package_url = build_identifier(component.module_version, repository_url)
        self._dependencies[component_id] = DependencyRecord(
            package_url=package_url,
            relationship=relationship,
            dependencies=tuple(child.id.display_name for child in children),
        )
        return children


def collect(
    root_component: Component,
    repository_url_lookup: Optional[RepositoryUrlLookupFn] = None,
    *,
    edges_of: EdgesFn = resolved_dependencies,
) -> Dict[str, DependencyRecord]:
    """Collect the dependency table for the configuration rooted at
    ``root_component``."""
    collector = ConfigurationDependencyCollector(
        root_component, repository_url_lookup, edges_of=edges_of
    )
    return collector.walk_component_graph()
