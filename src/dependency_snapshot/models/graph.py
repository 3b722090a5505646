"""Resolved component graph domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, cast


@dataclass(frozen=True)
class ComponentIdentifier:
    """Stable identity of a resolved component.

    ``display_name`` keys the dependency table. ``project_path`` is set only
    for components that belong to a project in the current build.
    """

    display_name: str
    project_path: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.display_name:
            raise ValueError("Component display name cannot be empty")

    @property
    def is_project(self) -> bool:
        return self.project_path is not None


@dataclass(frozen=True)
class ModuleVersion:
    """Coordinate triple of a resolved module."""

    group: str
    name: str
    version: str


@dataclass(eq=False)
class Component:
    """Node of a resolved component graph.

    Components are compared by identity so graphs may point back at
    themselves without recursing through ``__eq__``.
    """

    id: ComponentIdentifier
    module_version: Optional[ModuleVersion] = None
    dependencies: List["DependencyResult"] = field(default_factory=list)

    def depends_on(self, component: "Component") -> "Component":
        """Append a resolved edge to ``component`` and return ``self``."""
        self.dependencies.append(
            DependencyResult(
                requested=component.id.display_name, selected=component
            )
        )
        return self

    def __repr__(self) -> str:
        return f"Component({self.id.display_name!r})"


@dataclass(frozen=True, eq=False)
class DependencyResult:
    """Outgoing edge; ``selected`` is None when resolution failed."""

    requested: str
    selected: Optional[Component] = None

    @property
    def is_resolved(self) -> bool:
        return self.selected is not None


@dataclass(frozen=True)
class Repository:
    """Repository declared for a configuration resolution."""

    id: str
    name: Optional[str] = None
    url: Optional[str] = None


def resolved_dependencies(component: Component) -> List[Component]:
    """Return the components selected by ``component``'s resolved edges."""
    return [
        cast(Component, edge.selected)
        for edge in component.dependencies
        if edge.is_resolved
    ]
