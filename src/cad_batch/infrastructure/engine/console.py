"""Wrapper around the CAD engine's console mode."""

import subprocess
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from cad_batch.domain.models import FileTask, ProcessOutcome
from cad_batch.shared.logging import get_logger

OPEN_FILE_FLAG = "/i"
RUN_SCRIPT_FLAG = "/s"


def _creation_flags() -> int:
    """Keep the engine from opening a console window on Windows."""
    if sys.platform == "win32":
        return subprocess.CREATE_NO_WINDOW
    return 0


class EngineConsoleRunner:
    """
    Runs the engine once per drawing with a hard per-file deadline.

    Implements IEngineRunner. Every outcome is returned as a value:
    normal exit, timeout (process killed) or launch failure. Nothing is
    raised to the caller.
    """

    def __init__(self, engine_path: Path, timeout_seconds: float):
        if timeout_seconds <= 0:
            raise ValueError("Timeout must be positive")
        self.engine_path = Path(engine_path)
        self.timeout_seconds = timeout_seconds
        self._logger = get_logger(__name__)

    def build_command(self, task: FileTask, script_path: Path) -> List[str]:
        return [
            str(self.engine_path),
            OPEN_FILE_FLAG, str(task.file_path),
            RUN_SCRIPT_FLAG, str(script_path),
        ]

    def run(self, task: FileTask, script_path: Path) -> ProcessOutcome:
        """
        Launch the engine for a drawing and wait for it.

        Args:
            task: Drawing to open
            script_path: Automation script the engine should run

        Returns:
            ProcessOutcome describing how the invocation ended
        """
        cmd = self.build_command(task, script_path)
        self._logger.debug(f"Launching: {' '.join(cmd)}")

        started_at = datetime.now()
        proc: Optional[subprocess.Popen] = None
        try:
            proc = subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                creationflags=_creation_flags(),
            )
            exit_code = proc.wait(timeout=self.timeout_seconds)
            finished_at = datetime.now()
            self._logger.debug(f"{task.file_name}: engine exited with {exit_code}")
            return ProcessOutcome.completed(exit_code, started_at, finished_at)

        except subprocess.TimeoutExpired:
            stopped = self._kill(proc, task)
            finished_at = datetime.now()
            self._logger.warning(
                f"{task.file_name}: engine exceeded {self.timeout_seconds}s and was killed"
            )
            error = None
            if not stopped:
                error = f"Engine pid {proc.pid} still running after kill"
            return ProcessOutcome.timed_out(started_at, finished_at, error=error)

        except (OSError, subprocess.SubprocessError) as e:
            if proc is not None:
                self._kill(proc, task)
            finished_at = datetime.now()
            self._logger.error(f"{task.file_name}: engine launch failed: {e}")
            return ProcessOutcome.launch_failed(str(e), started_at, finished_at)

        except BaseException:
            # Ctrl+C never reaches a CREATE_NO_WINDOW child
            if proc is not None:
                self._kill(proc, task)
            raise

    def _kill(self, proc: subprocess.Popen, task: FileTask) -> bool:
        """Forcefully terminate the engine and reap it; False if it survived."""
        if proc.poll() is not None:
            return True
        proc.kill()
        try:
            proc.wait(timeout=self.timeout_seconds)
        except subprocess.TimeoutExpired:
            self._logger.error(f"{task.file_name}: engine pid {proc.pid} did not exit after kill")
            return False
        return True
