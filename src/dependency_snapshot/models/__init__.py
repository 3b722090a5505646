"""Domain model package exports."""

from .events import (LoadProjectsDetails, LoadProjectsResult, OperationKind,
                     ProjectNode, ResolveConfigurationDetails,
                     ResolveConfigurationResult, UnknownOperation, kind_of)
from .graph import (Component, ComponentIdentifier, DependencyResult,
                    ModuleVersion, Repository, resolved_dependencies)
from .manifest import (DependencyRecord, Manifest, ManifestFile, Project,
                       Relationship, Snapshot, SnapshotMetadata)

__all__ = [
    "Component",
    "ComponentIdentifier",
    "DependencyRecord",
    "DependencyResult",
    "LoadProjectsDetails",
    "LoadProjectsResult",
    "Manifest",
    "ManifestFile",
    "ModuleVersion",
    "OperationKind",
    "Project",
    "ProjectNode",
    "Relationship",
    "Repository",
    "ResolveConfigurationDetails",
    "ResolveConfigurationResult",
    "Snapshot",
    "SnapshotMetadata",
    "UnknownOperation",
    "kind_of",
    "resolved_dependencies",
]
