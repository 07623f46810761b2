"""Filesystem storage package."""

from cad_batch.infrastructure.storage.artifacts import DrawingFolder, marker_exists, remove_backup

__all__ = ["DrawingFolder", "marker_exists", "remove_backup"]
