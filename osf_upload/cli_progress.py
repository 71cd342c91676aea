"""Console rendering helpers for the osf-upload CLI."""
from __future__ import annotations

from typing import Any, Dict

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .models import UploadResult, UploadStatus
from .orchestrator.models import PreviewReport, UploadReport

console = Console(highlight=False)

_STATUS_STYLE = {
    UploadStatus.SUCCESS: ("green", "okay"),
    UploadStatus.SKIPPED: ("yellow", "skipped"),
    UploadStatus.FAILED: ("red", "failed"),
}


def render_configuration_summary(config: Dict[str, Any]) -> None:
    """Render startup configuration summary."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column(style="white")

    for key, value in config.items():
        rendered = "-" if value is None else str(value)
        table.add_row(key, escape(rendered))

    panel = Panel(
        table,
        title="[bold green]osf-upload[/bold green]",
        subtitle="[dim]study data migration[/dim]",
        border_style="blue",
    )
    console.print(panel)


def render_preview(report: PreviewReport) -> None:
    console.print(
        f"[green]Found [white]{report.file_count}[/white] file(s) to upload to main OSF directory.[/green]"
    )
    console.print(
        f"[green]Found [white]{report.dictionary_count}[/white] data dictionary files.[/green]"
    )
    console.print(
        f"[green]Found [white]{report.raw_file_count}[/white] file(s) to upload to raw OSF directory.[/green]"
    )
    console.print(
        f"[green]Found raw data directory [white]{escape(report.raw_location)}[/white].[/green]"
    )


def render_file_start(name: str, destination: str) -> None:
    console.print(f"[dim]Uploading {escape(name)} ({destination})...[/dim]")


def render_file_result(result: UploadResult) -> None:
    style, label = _STATUS_STYLE[result.status]
    console.print(f"Upload of {escape(result.filename)} [{style}]{label}[/{style}].")
    if result.error:
        console.print(f"[red]{escape(result.error)}[/red]")


def render_upload_summary(report: UploadReport) -> None:
    console.print(
        "Upload complete. Successfully uploaded "
        f"[green]{len(report.succeeded)}[/green] files, "
        f"[yellow]{len(report.skipped)}[/yellow] skipped, "
        f"[red]{len(report.failed)}[/red] errors."
    )


def render_error(message: str) -> None:
    console.print(f"[red]Failed with error: [white]{escape(message)}[/white][/red]")


def render_notice(message: str) -> None:
    console.print(escape(message))


def read_line(prompt: str) -> str:
    return console.input(escape(prompt))
