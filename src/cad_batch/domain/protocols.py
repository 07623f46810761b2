"""Protocol definitions for dependency inversion."""

from typing import Protocol, Optional
from pathlib import Path
from .models import FileTask, ProcessOutcome, FileRecord, Session


class IEngineRunner(Protocol):
    """Interface for invoking the CAD engine on one drawing."""

    def run(self, task: FileTask, script_path: Path) -> ProcessOutcome:
        """Run the engine for a drawing and report how it ended."""
        ...


class ISessionRecorder(Protocol):
    """Interface for sinks that record a batch session (log file, console)."""

    def write_header(self, session: Session) -> None:
        """Record the session header once, before the first file."""
        ...

    def write_record(self, record: FileRecord) -> None:
        """Record the outcome of one drawing."""
        ...

    def write_warning(self, message: str) -> None:
        """Record a non-fatal problem."""
        ...

    def write_summary(self, session: Session) -> None:
        """Record the session summary once, after the last file."""
        ...


class IFolderPrompt(Protocol):
    """Interface for asking the operator which folder to process."""

    def __call__(self, title: str) -> Optional[str]:
        """Return the chosen folder, or None when the operator cancels."""
        ...


class ILogger(Protocol):
    """Interface for logging."""

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, **kwargs) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, **kwargs) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, **kwargs) -> None:
        """Log error message."""
        ...

    def exception(self, message: str, **kwargs) -> None:
        """Log exception with traceback."""
        ...
