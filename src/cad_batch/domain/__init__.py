"""Domain layer package."""

from .models import (
    TIMEOUT_EXIT_CODE,
    OutcomeKind,
    FileStatus,
    FileTask,
    ProcessOutcome,
    FileRecord,
    SessionCounters,
    Session,
    classify,
)
from .exceptions import (
    DomainException,
    ConfigurationError,
    BackupCleanupError,
)
from .protocols import (
    IEngineRunner,
    ISessionRecorder,
    IFolderPrompt,
    ILogger,
)

__all__ = [
    # Models
    "TIMEOUT_EXIT_CODE",
    "OutcomeKind",
    "FileStatus",
    "FileTask",
    "ProcessOutcome",
    "FileRecord",
    "SessionCounters",
    "Session",
    "classify",
    # Exceptions
    "DomainException",
    "ConfigurationError",
    "BackupCleanupError",
    # Protocols
    "IEngineRunner",
    "ISessionRecorder",
    "IFolderPrompt",
    "ILogger",
]
