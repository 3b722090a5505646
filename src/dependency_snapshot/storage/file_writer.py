"""Write snapshots to the local filesystem."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from dependency_snapshot.config import REPORT_DIRECTORY, REPORT_FILE_NAME
from dependency_snapshot.models.manifest import Snapshot

from .payload import Detector, snapshot_to_payload

_LOGGER = logging.getLogger(__name__)


class DependencyFileWriter:
    """Persist snapshots as JSON below ``output_dir``."""

    def __init__(
        self,
        output_dir: Union[str, Path],
        *,
        detector: Optional[Detector] = None,
    ) -> None:
        self._output_dir = Path(output_dir)
        self._detector = detector

    @property
    def report_path(self) -> Path:
        return self._output_dir / REPORT_DIRECTORY / REPORT_FILE_NAME

    def write_dependency_manifest(self, snapshot: Snapshot) -> Path:
        """Write ``snapshot`` and return the file location."""
        payload = snapshot_to_payload(snapshot, self._detector)
        path = self.report_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, indent=2, sort_keys=False),
            encoding="utf-8",
        )
        _LOGGER.info(
            "Wrote %d manifest(s) to %s", len(snapshot.manifests), path
        )
        return path
