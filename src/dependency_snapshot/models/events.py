"""Build operation payloads delivered to the extractor service.

Each details/result variant carries an :class:`OperationKind`. The service
matches a finished operation by comparing the kinds of both halves instead
of inspecting runtime types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from .graph import Component, Repository


class OperationKind(str, Enum):
    """Known kinds of build operations."""

    RESOLVE_CONFIGURATION = "resolve_configuration"
    LOAD_PROJECTS = "load_projects"


@dataclass(frozen=True)
class ResolveConfigurationDetails:
    """Inputs of a configuration resolution."""

    configuration_name: str
    repositories: Sequence[Repository] = ()
    kind: OperationKind = field(
        default=OperationKind.RESOLVE_CONFIGURATION, init=False
    )


@dataclass(frozen=True)
class ResolveConfigurationResult:
    """Resolved graph of a configuration.

    ``repository_ids`` maps a component display name to the id of the
    repository the component was resolved from.
    """

    root_component: Component
    repository_ids: Mapping[str, str] = field(default_factory=dict)
    kind: OperationKind = field(
        default=OperationKind.RESOLVE_CONFIGURATION, init=False
    )

    def get_repository_id(self, component: Component) -> Optional[str]:
        return self.repository_ids.get(component.id.display_name)


@dataclass(frozen=True)
class ProjectNode:
    """Node of the project hierarchy."""

    identity_path: str
    build_file: Path
    children: List["ProjectNode"] = field(default_factory=list)


@dataclass(frozen=True)
class LoadProjectsDetails:
    """Inputs of the project loading operation."""

    build_path: str = ":"
    kind: OperationKind = field(
        default=OperationKind.LOAD_PROJECTS, init=False
    )


@dataclass(frozen=True)
class LoadProjectsResult:
    """Project hierarchy produced by project loading."""

    root_project: ProjectNode
    kind: OperationKind = field(
        default=OperationKind.LOAD_PROJECTS, init=False
    )


@dataclass(frozen=True)
class UnknownOperation:
    """Details or result of an operation the extractor does not handle."""

    name: str = "unknown"
    kind: Optional[OperationKind] = None


def kind_of(payload: object) -> Optional[OperationKind]:
    """Return the known kind tagged on ``payload`` or None."""
    kind = getattr(payload, "kind", None)
    if isinstance(kind, OperationKind):
        return kind
    return None
