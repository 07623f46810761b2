"""CLI interface for the CAD batch runner."""
import sys
import getpass
import logging
import argparse
import platform
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from cad_batch import __version__
from cad_batch.application.batch_runner import BatchRunner
from cad_batch.application.validation import resolve_folder, validate_paths
from cad_batch.domain.exceptions import DomainException
from cad_batch.domain.models import Session
from cad_batch.infrastructure.config import ConfigLoader
from cad_batch.infrastructure.engine import EngineConsoleRunner
from cad_batch.infrastructure.reporting import SessionLog
from cad_batch.infrastructure.storage import DrawingFolder
from cad_batch.presentation.console import ConsoleReporter
from cad_batch.presentation.folder_prompt import select_folder
from cad_batch.shared.logging import setup_logger, LoggerAdapter, get_logger, ROOT_LOGGER


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cad-batch",
        description="Run a CAD engine script over every drawing in a folder"
    )
    parser.add_argument('folder', nargs='?', help='Folder with drawings (prompted if omitted)')
    parser.add_argument('--script-file', type=Path, help='Automation script passed to the engine')
    parser.add_argument('--engine-path', type=Path, help='CAD console executable')
    parser.add_argument('--timeout-seconds', type=int, help='Per-file timeout (default: 25)')
    parser.add_argument('--extension', action='append', dest='extensions',
                        help='Drawing extension to match, repeatable (default: .dwg)')
    parser.add_argument('--config', type=Path, help='Config YAML file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose')
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_logger(ROOT_LOGGER, level=log_level, propagate=False)

    logger = get_logger(__name__)
    reporter = ConsoleReporter()
    errors = ConsoleReporter(Console(stderr=True, highlight=False, soft_wrap=True))

    try:
        overrides = {
            'folder': args.folder,
            'script_file': args.script_file,
            'engine_path': args.engine_path,
            'timeout_seconds': args.timeout_seconds,
            'extensions': args.extensions,
        }
        config = ConfigLoader(config_path=args.config).load(overrides=overrides)

        folder = resolve_folder(config.folder, select_folder)
        if folder is None:
            reporter.info("No folder selected; nothing to do.")
            return 0

        validate_paths(folder, config.script_file, config.engine_path)

        drawings = DrawingFolder(folder, config.extensions)
        files = drawings.discover()
        if not files:
            reporter.info(
                f"No {', '.join(config.extensions)} files found in {folder}; nothing to do."
            )
            return 0

        session = Session(
            folder=folder,
            script_path=config.script_file,
            engine_path=config.engine_path,
            timeout_seconds=config.timeout_seconds,
            files=files,
            machine=platform.node(),
            user=_current_user(),
        )

        engine = EngineConsoleRunner(config.engine_path, config.timeout_seconds)
        log_path = drawings.log_path(config.log_name)
        with SessionLog(log_path) as session_log:
            runner = BatchRunner(
                engine=engine,
                recorders=[session_log, reporter],
                logger=LoggerAdapter(get_logger('cad_batch.runner')),
            )
            runner.run(session)

        reporter.info(f"Log written to {log_path}")
        return 0

    except DomainException as e:
        errors.error(f"Configuration error: {e}")
        return 1
    except OSError as e:
        errors.error(f"File system error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130


if __name__ == '__main__':
    sys.exit(main())
