"""Sequential batch runner for CAD drawings."""

from pathlib import Path
from typing import Optional, Sequence

from cad_batch.domain.exceptions import BackupCleanupError
from cad_batch.domain.models import FileRecord, FileTask, OutcomeKind, Session
from cad_batch.domain.protocols import IEngineRunner, ILogger, ISessionRecorder
from cad_batch.infrastructure.storage.artifacts import marker_exists, remove_backup


class BatchRunner:
    """
    Runs the engine over every drawing of a session, one at a time.

    The backup left by drawing i is removed when drawing i+1 starts, and
    the last drawing's backup is removed once after the loop, so the
    engine can hold its backup while it is still running.
    """

    def __init__(
        self,
        engine: IEngineRunner,
        recorders: Sequence[ISessionRecorder],
        logger: ILogger
    ):
        self._engine = engine
        self._recorders = list(recorders)
        self._logger = logger

    def run(self, session: Session) -> Session:
        """Process every file of the session and write the summary."""
        self._logger.info(
            f"Processing {session.total_files} drawings in {session.folder} "
            f"(timeout {session.timeout_seconds}s)"
        )
        for recorder in self._recorders:
            recorder.write_header(session)

        previous: Optional[FileTask] = None
        for index, file_path in enumerate(session.files, start=1):
            task = FileTask.from_path(file_path)
            self._cleanup_backup(previous)

            self._logger.debug(f"[{index}/{session.total_files}] {task.file_name}")
            record = self.process_file(task, session.script_path)
            session.add_record(record)
            for recorder in self._recorders:
                recorder.write_record(record)

            previous = task

        self._cleanup_backup(previous)

        session.finish()
        for recorder in self._recorders:
            recorder.write_summary(session)

        counters = session.counters
        self._logger.info(
            f"Done in {session.duration_minutes:.2f} min: "
            f"{counters.processed} processed, {counters.errored} errors, "
            f"{counters.marker_found} markers found"
        )
        return session

    def process_file(self, task: FileTask, script_path: Path) -> FileRecord:
        """Run the engine for one drawing and classify the result."""
        outcome = self._engine.run(task, script_path)

        marker: Optional[bool] = None
        if outcome.kind is not OutcomeKind.LAUNCH_FAILED:
            marker = marker_exists(task)

        record = FileRecord.build(task, outcome, marker)
        if record.succeeded:
            self._logger.debug(f"{task.file_name}: success")
        elif outcome.kind is OutcomeKind.COMPLETED and outcome.exit_code == 0:
            self._logger.warning(f"{task.file_name}: engine exited cleanly but no marker file was written")
        return record

    def _cleanup_backup(self, task: Optional[FileTask]) -> None:
        try:
            remove_backup(task)
        except BackupCleanupError as e:
            self._logger.warning(str(e))
            for recorder in self._recorders:
                recorder.write_warning(str(e))
