"""Infrastructure layer package."""

from cad_batch.infrastructure.config import ConfigLoader, BatchConfig
from cad_batch.infrastructure.engine import EngineConsoleRunner
from cad_batch.infrastructure.reporting import SessionLog
from cad_batch.infrastructure.storage import DrawingFolder, marker_exists, remove_backup

__all__ = [
    "ConfigLoader",
    "BatchConfig",
    "EngineConsoleRunner",
    "SessionLog",
    "DrawingFolder",
    "marker_exists",
    "remove_backup",
]
