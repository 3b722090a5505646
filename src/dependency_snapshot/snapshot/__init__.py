"""Snapshot aggregation."""

from .builder import SnapshotBuilder

__all__ = ["SnapshotBuilder"]
