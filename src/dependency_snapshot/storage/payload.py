"""Render snapshots as dependency submission documents."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dependency_snapshot import __version__
from dependency_snapshot.config import DETECTOR_NAME, DETECTOR_URL
from dependency_snapshot.models.manifest import (DependencyRecord, Manifest,
                                                 Snapshot)


@dataclass(frozen=True)
class Detector:
    """Tool reported as the producer of a snapshot."""

    name: str
    version: str
    url: str


def default_detector() -> Detector:
    return Detector(name=DETECTOR_NAME, version=__version__, url=DETECTOR_URL)


def snapshot_to_payload(
    snapshot: Snapshot,
    detector: Optional[Detector] = None,
    scanned: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Return the JSON-ready submission document for ``snapshot``."""
    detector = detector or default_detector()
    scanned_at = scanned or datetime.now(timezone.utc)
    return {
        "version": _run_number(snapshot.run_number),
        "job": {
            "correlator": snapshot.job_name,
            "id": snapshot.run_number,
        },
        "sha": snapshot.sha,
        "ref": snapshot.ref,
        "detector": {
            "name": detector.name,
            "version": detector.version,
            "url": detector.url,
        },
        "scanned": scanned_at.isoformat(),
        "manifests": {
            name: _manifest_payload(manifest)
            for name, manifest in snapshot.manifests.items()
        },
    }


def _manifest_payload(manifest: Manifest) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"name": manifest.name}
    if manifest.file is not None:
        payload["file"] = {"source_location": manifest.file.source_location}
    payload["resolved"] = {
        component_id: _record_payload(record)
        for component_id, record in manifest.resolved.items()
    }
    return payload


def _record_payload(record: DependencyRecord) -> Dict[str, Any]:
    return {
        "package_url": record.package_url,
        "relationship": record.relationship.value,
        "dependencies": list(record.dependencies),
    }


def _run_number(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        return 0
