"""Colour-coded console mirror of the session log."""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from cad_batch.domain.models import FileRecord, FileStatus, Session
from cad_batch.infrastructure.reporting.session_log import (
    format_optional,
    format_timestamp,
    status_label,
)


class ConsoleReporter:
    """Implements ISessionRecorder on the terminal using rich."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False, soft_wrap=True)
        self._index = 0
        self._total = 0

    def write_header(self, session: Session) -> None:
        self._index = 0
        self._total = session.total_files
        self.console.rule("[bold]CAD Batch Processing[/bold]")
        self.console.print(f"Folder:  {escape(str(session.folder))}")
        self.console.print(f"Script:  {escape(str(session.script_path))}")
        self.console.print(f"Started: {format_timestamp(session.started_at)}")
        self.console.print(f"Found [bold]{session.total_files}[/bold] drawing(s)\n")

    def write_record(self, record: FileRecord) -> None:
        self._index += 1
        colour = "green" if record.status is FileStatus.SUCCESS else "red"
        outcome = record.outcome
        details = (
            f"exit={format_optional(outcome.exit_code)} "
            f"marker={format_optional(record.marker_exists)} "
            f"time={format_optional(outcome.duration_seconds)}s"
        )
        self.console.print(
            f"{escape(f'[{self._index}/{self._total}]')} {escape(record.task.file_name)}: "
            f"[{colour}]{escape(status_label(record))}[/{colour}] [dim]{details}[/dim]"
        )
        if outcome.error:
            self.console.print(f"    [red]{escape(outcome.error)}[/red]")

    def write_warning(self, message: str) -> None:
        self.console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def write_summary(self, session: Session) -> None:
        counters = session.counters
        self.console.print()
        self.console.rule("[bold]Summary[/bold]")
        self.console.print(f"Finished:      {format_timestamp(session.finished_at)}")
        self.console.print(f"Duration:      {session.duration_minutes:.2f} min")
        self.console.print(f"[green]Processed:     {counters.processed}[/green]")
        errors_style = "red" if counters.errored else "green"
        self.console.print(f"[{errors_style}]Errors:        {counters.errored}[/{errors_style}]")
        self.console.print(f"Markers found: {counters.marker_found}")

    def info(self, message: str) -> None:
        self.console.print(escape(message))

    def error(self, message: str) -> None:
        self.console.print(f"[red]{escape(message)}[/red]")
