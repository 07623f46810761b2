"""Plain-text session log written next to the drawings."""

import logging
from datetime import datetime
from itertools import count
from pathlib import Path
from typing import Any, Optional

from cad_batch.domain.models import FileRecord, OutcomeKind, Session
from cad_batch.shared.logging import setup_logger, close_logger

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
NOT_APPLICABLE = "N/A"
SEPARATOR = "=" * 60
RULE = "-" * 60

_instances = count(1)


def format_timestamp(value: Optional[datetime]) -> str:
    return value.strftime(TIMESTAMP_FORMAT) if value else NOT_APPLICABLE


def format_optional(value: Any) -> str:
    return NOT_APPLICABLE if value is None else str(value)


def status_label(record: FileRecord) -> str:
    """SUCCESS / ERROR, with launch failures marked as exceptions."""
    if record.outcome.kind is OutcomeKind.LAUNCH_FAILED:
        return f"{record.status.value} (Exception)"
    return record.status.value


class SessionLog:
    """
    Append-only text log of one batch session.

    Implements ISessionRecorder. The file is truncated when the session
    starts and appended to until close(). It is not created before
    write_header() so that runs aborted during validation leave no log.
    """

    def __init__(self, log_path: Path):
        self.log_path = Path(log_path)
        self._logger: Optional[logging.Logger] = None

    def open(self) -> None:
        if self._logger is not None:
            return
        self._logger = setup_logger(
            f"cad_batch.session_log.{next(_instances)}",
            level=logging.INFO,
            log_file=self.log_path,
            format_string="%(message)s",
            console=False,
            file_mode="w",
            propagate=False,
        )

    def close(self) -> None:
        if self._logger is not None:
            close_logger(self._logger)
            self._logger = None

    def __enter__(self) -> "SessionLog":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _write(self, line: str = "") -> None:
        if self._logger is None:
            self.open()
        self._logger.info(line)

    def write_header(self, session: Session) -> None:
        self.open()
        self._write(SEPARATOR)
        self._write("CAD Batch Processing Log")
        self._write(SEPARATOR)
        self._write(f"Machine:    {session.machine}")
        self._write(f"User:       {session.user}")
        self._write(f"Folder:     {session.folder}")
        self._write(f"Script:     {session.script_path}")
        self._write(f"Engine:     {session.engine_path}")
        self._write(f"Timeout:    {session.timeout_seconds}s")
        self._write(f"Start Time: {format_timestamp(session.started_at)}")
        self._write(f"File Count: {session.total_files}")
        self._write(SEPARATOR)
        self._write()

    def write_record(self, record: FileRecord) -> None:
        outcome = record.outcome
        self._write(f"File:         {record.task.file_name}")
        self._write(f"Start Time:   {format_timestamp(outcome.started_at)}")
        self._write(f"End Time:     {format_timestamp(outcome.finished_at)}")
        self._write(f"Duration (s): {format_optional(outcome.duration_seconds)}")
        self._write(f"Marker Found: {format_optional(record.marker_exists)}")
        self._write(f"Exit Code:    {format_optional(outcome.exit_code)}")
        if outcome.error:
            self._write(f"Error:        {outcome.error}")
        self._write(f"Status:       {status_label(record)}")
        self._write(RULE)

    def write_warning(self, message: str) -> None:
        self._write(f"WARNING: {message}")

    def write_summary(self, session: Session) -> None:
        counters = session.counters
        self._write()
        self._write(SEPARATOR)
        self._write("Summary")
        self._write(SEPARATOR)
        self._write(f"End Time:             {format_timestamp(session.finished_at)}")
        self._write(f"Total Duration (min): {session.duration_minutes:.2f}")
        self._write(f"Total Files:          {session.total_files}")
        self._write(f"Processed:            {counters.processed}")
        self._write(f"Errors:               {counters.errored}")
        self._write(f"Markers Found:        {counters.marker_found}")
        self._write(SEPARATOR)
