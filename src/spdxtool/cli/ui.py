"""
UI components module for the spdx CLI.

Provides styled terminal output using the Rich library for per-file
diagnostics, run summaries, and error rendering.
"""

import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from spdxtool.core.header_codec import HeaderStatus
from spdxtool.services.license_init import InitResult
from spdxtool.services.reconciliation import (
    ProcessResult,
    ReconcileMode,
    ReconcileSummary,
)


def display_path(path: Path, cwd: Path) -> str:
    """Return ``path`` relative to ``cwd`` when it lies below it."""
    try:
        return Path(path).relative_to(cwd).as_posix()
    except ValueError:
        return os.fspath(path)


def render_result(
    result: ProcessResult, mode: ReconcileMode, cwd: Path, console: Console
) -> None:
    """
    Render the diagnostic line for one processed file.

    Files whose header already matches produce no output.
    """
    shown = escape(display_path(result.path, cwd))

    if result.error is not None:
        console.print(f"[red]Error:[/red] {shown}: {escape(result.error)}")
        return

    if mode is ReconcileMode.FIX:
        if result.was_modified:
            console.print(f"[green]Updated:[/green] {shown}")
        return

    if result.header_was_missing:
        if result.state is not None and result.state.status is HeaderStatus.STALE:
            console.print(f"[yellow]Stale header:[/yellow] {shown}")
        else:
            console.print(f"[yellow]Missing header:[/yellow] {shown}")


def render_summary(summary: ReconcileSummary, console: Console) -> None:
    """
    Render the run summary as a compact panel.

    Args:
        summary: Reconciliation summary
        console: Rich Console instance for output.
    """
    table = Table.grid(padding=1)
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Files Checked:", str(summary.total))

    if summary.mode is ReconcileMode.CHECK:
        color = "red" if summary.needs_header else "green"
        table.add_row("Missing Headers:", f"[{color}]{summary.needs_header}[/{color}]")
        title = "[bold]Header Check[/bold]"
    else:
        table.add_row("Modified Files:", f"[green]{summary.modified}[/green]")
        title = "[bold]Header Fix[/bold]"

    if summary.errors:
        table.add_row("Errors:", f"[red]{summary.errors}[/red]")

    ok = summary.errors == 0 and (
        summary.mode is ReconcileMode.FIX or summary.needs_header == 0
    )
    console.print(Panel(table, title=title, border_style="green" if ok else "red", expand=False))


def render_init_result(result: InitResult, cwd: Path, console: Console) -> None:
    """Render the files written by ``spdx init``."""
    table = Table.grid(padding=1)
    table.add_column(style="bold")
    table.add_column()
    table.add_row("License:", result.spdx_id)
    table.add_row("Wrote:", escape(display_path(result.license_path, cwd)))
    table.add_row("Wrote:", escape(display_path(result.spdx_document_path, cwd)))

    console.print(
        Panel(
            table,
            title="[bold green]License Initialized[/bold green]",
            border_style="green",
            expand=False,
        )
    )


def render_error(message: str, console: Console) -> None:
    """
    Render an error message.

    Args:
        message: Error message to display.
        console: Rich Console instance for output (normally stderr).
    """
    error_text = Text()
    error_text.append("Error: ", style="bold red")
    error_text.append(message, style="red")
    console.print(error_text)

