"""Domain models for batch processing CAD drawings."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

# Exit code recorded when the engine is killed after the per-file deadline.
TIMEOUT_EXIT_CODE = -1


class OutcomeKind(Enum):
    """How a single engine invocation ended."""

    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    LAUNCH_FAILED = "launch_failed"


class FileStatus(Enum):
    """Final classification of a processed drawing."""

    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass(frozen=True)
class FileTask:
    """A drawing file plus the companion paths derived from it."""

    file_path: Path
    base_name: str
    directory: Path

    @classmethod
    def from_path(cls, path: Path) -> "FileTask":
        path = Path(path)
        return cls(file_path=path, base_name=path.stem, directory=path.parent)

    @property
    def file_name(self) -> str:
        return self.file_path.name

    @property
    def marker_path(self) -> Path:
        """Text file the automation script writes on completion."""
        return self.directory / f"{self.base_name}.txt"

    @property
    def backup_path(self) -> Path:
        """Backup the engine leaves next to the drawing."""
        return self.directory / f"{self.base_name}.bak"


@dataclass(frozen=True)
class ProcessOutcome:
    """Result of running the engine once for a FileTask."""

    kind: OutcomeKind
    started_at: datetime
    finished_at: datetime
    exit_code: Optional[int] = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.finished_at < self.started_at:
            raise ValueError("finished_at cannot precede started_at")
        if self.kind is OutcomeKind.COMPLETED and self.exit_code is None:
            raise ValueError("Completed outcome requires an exit code")
        if self.kind is OutcomeKind.TIMED_OUT and self.exit_code != TIMEOUT_EXIT_CODE:
            raise ValueError(f"Timed out outcome must carry exit code {TIMEOUT_EXIT_CODE}")
        if self.kind is OutcomeKind.LAUNCH_FAILED and self.exit_code is not None:
            raise ValueError("Launch failure cannot carry an exit code")

    @classmethod
    def completed(cls, exit_code: int, started_at: datetime, finished_at: datetime) -> "ProcessOutcome":
        return cls(OutcomeKind.COMPLETED, started_at, finished_at, exit_code=exit_code)

    @classmethod
    def timed_out(
        cls, started_at: datetime, finished_at: datetime, error: Optional[str] = None
    ) -> "ProcessOutcome":
        return cls(OutcomeKind.TIMED_OUT, started_at, finished_at, exit_code=TIMEOUT_EXIT_CODE, error=error)

    @classmethod
    def launch_failed(cls, error: str, started_at: datetime, finished_at: datetime) -> "ProcessOutcome":
        return cls(OutcomeKind.LAUNCH_FAILED, started_at, finished_at, error=error)

    @property
    def duration_seconds(self) -> Optional[int]:
        """Whole seconds between start and end; None for launch failures."""
        if self.kind is OutcomeKind.LAUNCH_FAILED:
            return None
        return int(round((self.finished_at - self.started_at).total_seconds()))


def classify(outcome: ProcessOutcome, marker_exists: Optional[bool]) -> FileStatus:
    """
    Decide whether a drawing was processed successfully.

    A clean exit is not enough on its own: the engine can exit 0 without
    running the script to the end, so the marker file must exist too.
    """
    if (
        outcome.kind is OutcomeKind.COMPLETED
        and outcome.exit_code == 0
        and marker_exists is True
    ):
        return FileStatus.SUCCESS
    return FileStatus.ERROR


@dataclass
class FileRecord:
    """Everything logged about one drawing."""

    task: FileTask
    outcome: ProcessOutcome
    marker_exists: Optional[bool]
    status: FileStatus

    @classmethod
    def build(cls, task: FileTask, outcome: ProcessOutcome, marker_exists: Optional[bool]) -> "FileRecord":
        return cls(
            task=task,
            outcome=outcome,
            marker_exists=marker_exists,
            status=classify(outcome, marker_exists),
        )

    @property
    def succeeded(self) -> bool:
        return self.status is FileStatus.SUCCESS


@dataclass
class SessionCounters:
    """Running totals for a batch session."""

    processed: int = 0
    errored: int = 0
    marker_found: int = 0

    def record(self, record: FileRecord) -> None:
        """Apply one file's record. Must be called exactly once per file."""
        if record.succeeded:
            self.processed += 1
        else:
            self.errored += 1
        if record.marker_exists:
            self.marker_found += 1


@dataclass
class Session:
    """State of a single batch run, from discovery to summary."""

    folder: Path
    script_path: Path
    engine_path: Path
    timeout_seconds: float
    files: List[Path]
    machine: str = ""
    user: str = ""
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None
    counters: SessionCounters = field(default_factory=SessionCounters)
    records: List[FileRecord] = field(default_factory=list)

    def __post_init__(self):
        if self.timeout_seconds <= 0:
            raise ValueError("Timeout must be positive")

    @property
    def total_files(self) -> int:
        return len(self.files)

    def add_record(self, record: FileRecord) -> None:
        self.records.append(record)
        self.counters.record(record)

    def finish(self, when: Optional[datetime] = None) -> None:
        self.finished_at = when or datetime.now()

    @property
    def duration_minutes(self) -> float:
        """Total run time in minutes, rounded to two decimals."""
        end = self.finished_at or datetime.now()
        return round((end - self.started_at).total_seconds() / 60.0, 2)
