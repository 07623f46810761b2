"""Tests for the engine console wrapper."""

import os
import subprocess
import sys
from pathlib import Path
from unittest import mock

import pytest

from cad_batch.domain.models import FileTask, OutcomeKind
from cad_batch.infrastructure.engine import EngineConsoleRunner
from cad_batch.infrastructure.engine import console as engine_console

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake engine is a POSIX sh wrapper")


def test_build_command(tmp_path):
    runner = EngineConsoleRunner(Path("/cad/accoreconsole.exe"), 25)
    task = FileTask.from_path(tmp_path / "A.dwg")

    cmd = runner.build_command(task, Path("/scripts/run.scr"))

    assert cmd == [
        str(Path("/cad/accoreconsole.exe")),
        "/i", str(tmp_path / "A.dwg"),
        "/s", str(Path("/scripts/run.scr")),
    ]


def test_rejects_non_positive_timeout():
    with pytest.raises(ValueError):
        EngineConsoleRunner(Path("/cad/console"), 0)


def test_creation_flags_hide_window_on_windows(monkeypatch):
    monkeypatch.setattr(engine_console.sys, "platform", "win32")
    monkeypatch.setattr(engine_console.subprocess, "CREATE_NO_WINDOW", 0x08000000, raising=False)
    assert engine_console._creation_flags() == 0x08000000

    monkeypatch.setattr(engine_console.sys, "platform", "linux")
    assert engine_console._creation_flags() == 0


def test_missing_engine_is_launch_failure(tmp_path):
    runner = EngineConsoleRunner(tmp_path / "no-such-engine", 5)

    outcome = runner.run(FileTask.from_path(tmp_path / "A.dwg"), tmp_path / "run.scr")

    assert outcome.kind is OutcomeKind.LAUNCH_FAILED
    assert outcome.exit_code is None
    assert outcome.duration_seconds is None
    assert outcome.error
    assert outcome.finished_at >= outcome.started_at


def test_wait_error_kills_started_process(tmp_path):
    proc = mock.Mock()
    proc.wait.side_effect = [subprocess.SubprocessError("wait failed"), 0]
    proc.poll.return_value = None

    with mock.patch.object(engine_console.subprocess, "Popen", return_value=proc) as popen:
        outcome = EngineConsoleRunner(tmp_path / "engine", 5).run(
            FileTask.from_path(tmp_path / "A.dwg"), tmp_path / "run.scr"
        )

    assert outcome.kind is OutcomeKind.LAUNCH_FAILED
    assert "wait failed" in outcome.error
    proc.kill.assert_called_once()
    kwargs = popen.call_args.kwargs
    assert kwargs["stdout"] is subprocess.DEVNULL
    assert kwargs["stdin"] is subprocess.DEVNULL


def test_timeout_kills_process(tmp_path):
    proc = mock.Mock()
    proc.wait.side_effect = [subprocess.TimeoutExpired("engine", 5), -9]
    proc.poll.return_value = None

    with mock.patch.object(engine_console.subprocess, "Popen", return_value=proc):
        outcome = EngineConsoleRunner(tmp_path / "engine", 5).run(
            FileTask.from_path(tmp_path / "A.dwg"), tmp_path / "run.scr"
        )

    assert outcome.kind is OutcomeKind.TIMED_OUT
    # The exit status after kill is never reported
    assert outcome.exit_code == -1
    proc.kill.assert_called_once()
    assert proc.wait.call_count == 2
    assert outcome.error is None


def test_kill_survivor_pid_is_reported(tmp_path):
    proc = mock.Mock(pid=4321)
    proc.wait.side_effect = [subprocess.TimeoutExpired("engine", 5), subprocess.TimeoutExpired("engine", 5)]
    proc.poll.return_value = None

    with mock.patch.object(engine_console.subprocess, "Popen", return_value=proc):
        outcome = EngineConsoleRunner(tmp_path / "engine", 5).run(
            FileTask.from_path(tmp_path / "A.dwg"), tmp_path / "run.scr"
        )

    assert outcome.kind is OutcomeKind.TIMED_OUT
    assert "4321" in outcome.error


def test_interrupt_kills_process(tmp_path):
    proc = mock.Mock()
    proc.wait.side_effect = [KeyboardInterrupt(), 0]
    proc.poll.return_value = None

    with mock.patch.object(engine_console.subprocess, "Popen", return_value=proc):
        with pytest.raises(KeyboardInterrupt):
            EngineConsoleRunner(tmp_path / "engine", 5).run(
                FileTask.from_path(tmp_path / "A.dwg"), tmp_path / "run.scr"
            )

    proc.kill.assert_called_once()


@posix_only
def test_real_process_exit_code(tmp_path, fake_engine, script_file, make_drawing):
    drawing = make_drawing(tmp_path, "A.dwg", exit=3, marker=1)

    outcome = EngineConsoleRunner(fake_engine, 30).run(FileTask.from_path(drawing), script_file)

    assert outcome.kind is OutcomeKind.COMPLETED
    assert outcome.exit_code == 3
    assert (tmp_path / "A.txt").read_text() == "batch.scr"


@posix_only
def test_real_process_killed_on_timeout(tmp_path, fake_engine, script_file, make_drawing):
    drawing = make_drawing(tmp_path, "C.dwg", sleep=60, marker=1)

    outcome = EngineConsoleRunner(fake_engine, 3).run(FileTask.from_path(drawing), script_file)

    assert outcome.kind is OutcomeKind.TIMED_OUT
    assert outcome.exit_code == -1
    assert outcome.duration_seconds < 30
    assert not (tmp_path / "C.txt").exists()

    pid = int((tmp_path / "C.pid").read_text())
    with pytest.raises(ProcessLookupError):
        os.kill(pid, 0)
