"""Accumulate manifests and projects into repository snapshots."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from dependency_snapshot.models.manifest import (Manifest, ManifestFile,
                                                 Project, Snapshot,
                                                 SnapshotMetadata)

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ManifestEntry:
    project_identity_path: str
    manifest: Manifest


class SnapshotBuilder:
    """Thread-safe accumulator for one build's snapshot.

    Build tools may report configuration resolutions and project loading
    from several worker threads, so callers must not assume single-threaded
    delivery. Both maps are guarded by the same lock.
    """

    def __init__(self, metadata: SnapshotMetadata) -> None:
        self._metadata = metadata
        self._lock = threading.Lock()
        self._projects: Dict[str, Project] = {}
        self._manifests: Dict[str, _ManifestEntry] = {}

    def add_project(
        self, identity_path: str, build_file: Union[str, Path]
    ) -> None:
        """Insert or replace the project stored under ``identity_path``."""
        project = Project(identity_path=identity_path, build_file=Path(build_file))
        with self._lock:
            self._projects[identity_path] = project

    def add_manifest(
        self, name: str, project_identity_path: str, manifest: Manifest
    ) -> None:
        """Insert or replace the manifest stored under ``name``."""
        entry = _ManifestEntry(project_identity_path, manifest)
        with self._lock:
            if name in self._manifests:
                _LOGGER.debug("Replacing manifest %s", name)
            self._manifests[name] = entry

    def build(self) -> Snapshot:
        """Return an independent snapshot of everything added so far."""
        with self._lock:
            projects = dict(self._projects)
            entries = dict(self._manifests)

        manifests: Dict[str, Manifest] = {}
        for name, entry in entries.items():
            manifests[name] = Manifest(
                name=entry.manifest.name,
                resolved=entry.manifest.resolved,
                file=self._manifest_file(projects.get(entry.project_identity_path)),
            )

        metadata = self._metadata
        return Snapshot(
            job_name=metadata.job_name,
            run_number=metadata.run_number,
            sha=metadata.sha,
            ref=metadata.ref,
            workspace=metadata.workspace,
            projects=tuple(projects.values()),
            manifests=manifests,
        )

    def _manifest_file(self, project: Optional[Project]) -> Optional[ManifestFile]:
        if project is None:
            return None
        workspace = Path(self._metadata.workspace)
        build_file = project.build_file
        if not build_file.is_absolute():
            build_file = workspace / build_file
        try:
            relative = build_file.relative_to(workspace)
        except ValueError:
            _LOGGER.debug(
                "Build file %s of %s is outside the workspace",
                build_file,
                project.identity_path,
            )
            return None
        return ManifestFile(source_location=relative.as_posix())
