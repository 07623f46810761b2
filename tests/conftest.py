import os
import stat
import sys
import textwrap
from datetime import datetime, timedelta
from pathlib import Path
from types import SimpleNamespace

import pytest

# Ensure src/ is on sys.path so 'cad_batch' is importable without installing
SRC = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from cad_batch.domain.models import ProcessOutcome  # noqa: E402


# Stand-in for the CAD console. Behaviour is read from the drawing file
# itself, one key=value per line:
#   exit=<code>    process exit code (default 0)
#   marker=0|1     write <base>.txt (default 1)
#   bak=0|1        write <base>.bak (default 1)
#   sleep=<secs>   sleep before writing the marker (default 0)
# It also records its pid in <base>.pid and the .bak files present at
# launch in <base>.seen.
FAKE_ENGINE_SOURCE = textwrap.dedent('''
    import os
    import sys
    import time
    from pathlib import Path

    args = sys.argv[1:]
    drawing = Path(args[args.index("/i") + 1])
    script = Path(args[args.index("/s") + 1])

    opts = {}
    for line in drawing.read_text().splitlines():
        if "=" in line:
            key, value = line.split("=", 1)
            opts[key.strip()] = value.strip()

    base = str(drawing.with_suffix(""))
    Path(base + ".pid").write_text(str(os.getpid()))
    seen = sorted(p.name for p in drawing.parent.glob("*.bak"))
    Path(base + ".seen").write_text("\\n".join(seen))

    if opts.get("bak", "1") == "1":
        Path(base + ".bak").write_text("backup")
    time.sleep(float(opts.get("sleep", "0")))
    if opts.get("marker", "1") == "1":
        Path(base + ".txt").write_text(script.name)
    sys.exit(int(opts.get("exit", "0")))
''')


@pytest.fixture
def fake_engine(tmp_path) -> Path:
    """Executable that behaves like the CAD console for tests."""
    tools = tmp_path / "tools"
    tools.mkdir()
    source = tools / "fake_engine.py"
    source.write_text(FAKE_ENGINE_SOURCE)
    wrapper = tools / "accoreconsole"
    wrapper.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{source}" "$@"\n')
    wrapper.chmod(wrapper.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return wrapper


@pytest.fixture
def script_file(tmp_path) -> Path:
    path = tmp_path / "tools_scripts" / "batch.scr"
    path.parent.mkdir()
    path.write_text("_.QSAVE\n")
    return path


@pytest.fixture
def drawings_dir(tmp_path) -> Path:
    path = tmp_path / "drawings"
    path.mkdir()
    return path


def _make_drawing(folder: Path, name: str, **opts) -> Path:
    path = folder / name
    path.write_text("\n".join(f"{k}={v}" for k, v in opts.items()) + "\n")
    return path


def _completed(exit_code: int = 0, seconds: int = 3) -> ProcessOutcome:
    start = datetime(2024, 5, 1, 9, 0, 0)
    return ProcessOutcome.completed(exit_code, start, start + timedelta(seconds=seconds))


def _timed_out(seconds: int = 25) -> ProcessOutcome:
    start = datetime(2024, 5, 1, 9, 0, 0)
    return ProcessOutcome.timed_out(start, start + timedelta(seconds=seconds))


def _launch_failed(message: str = "[Errno 2] No such file or directory") -> ProcessOutcome:
    start = datetime(2024, 5, 1, 9, 0, 0)
    return ProcessOutcome.launch_failed(message, start, start)


@pytest.fixture
def make_drawing():
    """Create a drawing file carrying fake-engine instructions."""
    return _make_drawing


@pytest.fixture
def outcomes():
    """Builders for engine outcomes with fixed timestamps."""
    return SimpleNamespace(
        completed=_completed,
        timed_out=_timed_out,
        launch_failed=_launch_failed,
    )
