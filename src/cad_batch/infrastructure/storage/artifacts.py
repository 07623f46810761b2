"""Drawing discovery and companion-file management."""

from pathlib import Path
from typing import Iterable, List, Optional

from cad_batch.domain.exceptions import BackupCleanupError
from cad_batch.domain.models import FileTask
from cad_batch.shared.logging import get_logger

logger = get_logger(__name__)


class DrawingFolder:
    """Non-recursive view of the folder holding the drawings."""

    def __init__(self, folder: Path, extensions: Iterable[str]):
        """
        Initialize folder view.

        Args:
            folder: Directory containing the drawings
            extensions: Lower-case suffixes to match, e.g. ('.dwg',)
        """
        self.folder = Path(folder)
        self.extensions = tuple(e.lower() for e in extensions)
        self._logger = get_logger(__name__)

    def discover(self) -> List[Path]:
        """
        List matching drawings directly inside the folder.

        Suffixes match case-insensitively. Results are sorted by lower-cased
        name so a run is reproducible regardless of directory order.
        """
        drawings = [
            p for p in self.folder.iterdir()
            if p.is_file() and p.suffix.lower() in self.extensions
        ]
        drawings.sort(key=lambda p: (p.name.lower(), p.name))
        self._logger.debug(f"Found {len(drawings)} drawings in {self.folder}")
        return drawings

    def log_path(self, log_name: str) -> Path:
        return self.folder / log_name


def marker_exists(task: FileTask) -> bool:
    """Check for the marker file; its contents are never read."""
    return task.marker_path.is_file()


def remove_backup(task: Optional[FileTask]) -> bool:
    """
    Delete the backup artifact the engine left for a drawing.

    Args:
        task: Drawing whose backup should go; None is a no-op

    Returns:
        True if a file was deleted, False if there was nothing to delete

    Raises:
        BackupCleanupError: If the backup exists but could not be deleted
    """
    if task is None:
        return False

    backup = task.backup_path
    if not backup.exists():
        return False

    try:
        backup.unlink()
    except OSError as e:
        raise BackupCleanupError(backup, e.strerror or str(e)) from e

    logger.debug(f"Removed backup file: {backup}")
    return True
