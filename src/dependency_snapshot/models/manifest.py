"""
Dependency Snapshot Repository
Introductory remarks: This module is part of the Dependency Snapshot codebase.

Manifest and snapshot domain models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


class Relationship(str, Enum):
    """How a dependency is reached from its configuration root."""

    DIRECT = "direct"
    INDIRECT = "indirect"


@dataclass(frozen=True)
class DependencyRecord:
    """One entry of a manifest's resolved table."""

    package_url: str
    relationship: Relationship
    dependencies: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.relationship, Relationship):
            raise ValueError(
                f"Relationship '{self.relationship}' is not recognized"
            )
        object.__setattr__(self, "dependencies", tuple(self.dependencies))


@dataclass(frozen=True)
class ManifestFile:
    """Repository-relative location of the file declaring a manifest."""

    source_location: str


@dataclass(frozen=True)
class Manifest:
    """Dependencies resolved for a single configuration."""

    name: str
    resolved: Mapping[str, DependencyRecord] = field(default_factory=dict)
    file: Optional[ManifestFile] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Manifest name cannot be empty")
        object.__setattr__(
            self, "resolved", MappingProxyType(dict(self.resolved))
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Manifest):
            return NotImplemented
        return (
            self.name == other.name
            and dict(self.resolved) == dict(other.resolved)
            and self.file == other.file
        )

    def __hash__(self) -> int:
        return hash((self.name, self.file))


@dataclass(frozen=True)
class Project:
    """Project of the build, keyed by its identity path."""

    identity_path: str
    build_file: Path


@dataclass(frozen=True)
class SnapshotMetadata:
    """Job and source control details copied into every snapshot."""

    job_name: str
    run_number: str
    sha: str
    ref: str
    workspace: Path


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time aggregate of all manifests and projects for a build."""

    job_name: str
    run_number: str
    sha: str
    ref: str
    workspace: Path
    projects: Tuple[Project, ...] = ()
    manifests: Mapping[str, Manifest] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "projects", tuple(self.projects))
        object.__setattr__(
            self, "manifests", MappingProxyType(dict(self.manifests))
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snapshot):
            return NotImplemented
        return (
            self.job_name == other.job_name
            and self.run_number == other.run_number
            and self.sha == other.sha
            and self.ref == other.ref
            and self.workspace == other.workspace
            and self.projects == other.projects
            and dict(self.manifests) == dict(other.manifests)
        )

    def __hash__(self) -> int:
        return hash((self.job_name, self.run_number, self.sha, self.ref))
