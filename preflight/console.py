"""
Rich rendering of advisories.

Everything user-facing goes through ``AdvisorConsole`` so the CLI only decides
*what* to show.
"""
from __future__ import annotations
import contextlib
from typing import Iterator, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .commands import Advisory
from .drives import VolumeUsage
from .report import Report, format_size
from .scanner import ProgressCb, ScanError

POWER_WARNING = "Warning: All running applications will be closed, and unsaved work may be lost."
REMOVE_WARNING = ("Warning: This operation is irreversible. "
                  "All contents in the specified folder would be permanently deleted.")
UNKNOWN_MESSAGE = "Command not recognized or not supported for analysis."
UNANALYZED_SUMMARY = "0 files, unable to analyze."
STILL_PROCEEDS = "The deletion would still proceed if this command were executed."


class AdvisorConsole:
    def __init__(self, color: bool = True, force_terminal: Optional[bool] = None):
        self.console = Console(no_color=not color, force_terminal=force_terminal, highlight=False)

    def print_power(self, advisory: Advisory):
        self.console.print(f"You are requesting to [bold]{escape(advisory.command)}[/bold] your computer.")
        self.console.print(POWER_WARNING, style="yellow")

    def print_unknown(self, advisory: Advisory):
        self.console.print(UNKNOWN_MESSAGE, style="white dim")

    def print_removal_request(self, target: str):
        self.console.print(
            f"You are requesting to recursively remove the contents of \"[bold]{escape(target)}[/bold]\"."
        )

    def print_report(self, report: Report, volume: Optional[VolumeUsage] = None):
        lines = [
            f"[cyan dim]Files:[/cyan dim] [bold]{report.total_files}[/bold]",
            f"[cyan dim]Directories:[/cyan dim] [bold]{report.total_directories}[/bold]",
            f"[cyan dim]Total size:[/cyan dim] [bold]{report.total_size}[/bold]",
        ]
        if report.largest_file_size is not None:
            lines.append(f"[cyan dim]Largest file:[/cyan dim] [bold]{report.largest_file_size}[/bold]")
            lines.append(f"[cyan dim]  at[/cyan dim] {escape(report.largest_file_path or '')}")
        self.console.print(Panel("\n".join(lines), title="Would be deleted", box=box.ROUNDED,
                                 padding=(0, 1), expand=False))

        if report.top_extensions:
            table = Table(title="File types", box=box.SIMPLE)
            table.add_column("Extension", style="cyan")
            table.add_column("Files", justify="right")
            for ext, count in report.top_extensions:
                table.add_row(escape(ext), str(count))
            self.console.print(table)

        if volume is not None:
            self.console.print(
                f"Free space on {escape(volume.mountpoint)}: {format_size(volume.free)} "
                f"of {format_size(volume.total)} ({volume.percent:.1f}% used)",
                style="white dim",
            )

    def print_scan_failure(self, error: ScanError):
        self.console.print(f"Unable to analyze \"{escape(error.path)}\": {escape(error.reason)}", style="red bold")
        self.console.print(UNANALYZED_SUMMARY)
        self.console.print(STILL_PROCEEDS, style="yellow")

    def print_removal_warning(self):
        self.console.print(REMOVE_WARNING, style="yellow bold")

    @contextlib.contextmanager
    def scanning(self, target: str) -> Iterator[Optional[ProgressCb]]:
        """Spinner with live counters while a target is measured (terminals only)."""
        if not self.console.is_terminal:
            yield None
            return
        with self.console.status(f"Scanning {escape(target)}…") as status:
            def progress(cur: str, files: int, dirs: int, bytes_scanned: int):
                status.update(f"Scanning… {files} files • {dirs} folders • {format_size(bytes_scanned)}")
            yield progress
