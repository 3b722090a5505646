"""Snapshot persistence."""

from .file_writer import DependencyFileWriter
from .payload import Detector, default_detector, snapshot_to_payload

__all__ = [
    "DependencyFileWriter",
    "Detector",
    "default_detector",
    "snapshot_to_payload",
]
