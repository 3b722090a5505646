"""Listener that turns finished build operations into a snapshot.

The host build tool may call :meth:`DependencyExtractorService.finished`
from several threads at once; all shared state lives in the injected
:class:`SnapshotBuilder`.
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from types import TracebackType
from typing import Deque, Optional, Protocol, Type, cast

from dependency_snapshot.errors import AdapterTypeMismatch
from dependency_snapshot.extraction.collector import collect
from dependency_snapshot.extraction.repository import RepositoryUrlLookup
from dependency_snapshot.models.events import (LoadProjectsResult,
                                               OperationKind, ProjectNode,
                                               ResolveConfigurationDetails,
                                               ResolveConfigurationResult,
                                               kind_of)
from dependency_snapshot.models.manifest import Manifest, Snapshot
from dependency_snapshot.snapshot.builder import SnapshotBuilder

_LOGGER = logging.getLogger(__name__)


class SnapshotWriter(Protocol):
    def write_dependency_manifest(self, snapshot: Snapshot) -> Path: ...


class DependencyExtractorService:
    """Collect manifests and projects from build operation events."""

    def __init__(self, builder: SnapshotBuilder, writer: SnapshotWriter) -> None:
        self._builder = builder
        self._writer = writer
        self._closed = False

    @property
    def builder(self) -> SnapshotBuilder:
        return self._builder

    def finished(self, details: object, result: object) -> None:
        """Dispatch a finished operation to its handler.

        Operations of unknown kinds are ignored.

        Raises:
            AdapterTypeMismatch: when ``details`` and ``result`` belong to
                different kinds or only one of them is known.
        """
        details_kind = kind_of(details)
        result_kind = kind_of(result)
        if details_kind is None and result_kind is None:
            return
        if details_kind != result_kind:
            raise AdapterTypeMismatch(
                "Operation details and result were unexpected types: "
                f"{type(details).__name__} ({details_kind}) / "
                f"{type(result).__name__} ({result_kind})"
            )

        if details_kind is OperationKind.RESOLVE_CONFIGURATION:
            self.extract_dependencies(
                cast(ResolveConfigurationDetails, details),
                cast(ResolveConfigurationResult, result),
            )
        elif details_kind is OperationKind.LOAD_PROJECTS:
            self.extract_projects(cast(LoadProjectsResult, result))

    def extract_projects(self, result: LoadProjectsResult) -> None:
        """Register every project of the hierarchy, level by level."""
        queue: Deque[ProjectNode] = deque([result.root_project])
        visited: set[int] = set()
        while queue:
            project = queue.popleft()
            if id(project) in visited:
                continue
            visited.add(id(project))
            self._builder.add_project(project.identity_path, project.build_file)
            queue.extend(project.children)
        _LOGGER.debug("Registered %d project(s)", len(visited))

    def extract_dependencies(
        self,
        details: ResolveConfigurationDetails,
        result: ResolveConfigurationResult,
    ) -> Optional[Manifest]:
        """Collect the manifest of one resolved configuration.

        Returns None when the configuration root is not a project of the
        build; those configurations are skipped.
        """
        root = result.root_component
        if not root.id.is_project:
            # TODO: support roots identified by module coordinates
            # (detached and buildscript configurations).
            _LOGGER.info(
                "Skipping configuration %s: root %s is not a project",
                details.configuration_name,
                root.id.display_name,
            )
            return None

        lookup = RepositoryUrlLookup(details, result)
        dependencies = collect(root, lookup)
        name = f"{root.id.display_name} [{details.configuration_name}]"
        manifest = Manifest(name=name, resolved=dependencies)
        self._builder.add_manifest(name, root.id.project_path, manifest)
        _LOGGER.debug("Added manifest %s (%d dependencies)", name, len(dependencies))
        return manifest

    def write_and_get_snapshot_file(self) -> Path:
        """Write the current snapshot and return its location."""
        return self._writer.write_dependency_manifest(self._builder.build())

    def close(self) -> Optional[Path]:
        """Write the final snapshot once; later calls are no-ops."""
        if self._closed:
            return None
        path = self.write_and_get_snapshot_file()
        self._closed = True
        return path

    def __enter__(self) -> "DependencyExtractorService":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        if exc_type is None:
            self.close()
