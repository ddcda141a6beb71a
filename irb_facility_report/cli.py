"""
Command-line interface for the IRB facility report.

Running the program without a command builds the report and files it in
Google Drive; `preview` renders it without writing, and `connect` stores
an OAuth2 token for later unattended runs.
"""

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from irb_facility_report.config import get_settings
from irb_facility_report.models import ReportResult
from irb_facility_report.report import create_report_job
from irb_facility_report.utils.errors import ReportException
from irb_facility_report.utils.logging import setup_logging

app = typer.Typer(
    name="irb-facility-report",
    help="Build the IRB participating-facility report and file it in Google Drive",
    add_completion=False,
)
console = Console()


def _print_summary(result: ReportResult) -> None:
    table = Table(title="Facility report")
    table.add_column("Stage", style="cyan")
    table.add_column("Rows", justify="right")

    for stage, count in result.stage_counts.items():
        table.add_row(stage, str(count))
    table.add_row("rendered", str(result.line_count), style="bold")

    console.print(table)


@app.callback(invoke_without_command=True)
def default(ctx: typer.Context):
    """Run the report when no command is given."""
    if ctx.invoked_subcommand is None:
        run()


@app.command()
def run():
    """Build the report, archive the previous file and upload the new one."""
    settings = get_settings()

    try:
        job = create_report_job(settings)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            progress.add_task("Building facility report...", total=None)
            result = job.run()

        _print_summary(result)
        console.print(
            f"[green]✓[/green] Created {settings.report_file_name} "
            f"({result.archived_files} previous file(s) archived)"
        )

    except ReportException as e:
        console.print(f"[red]✗[/red] Report failed: {e}")
        raise typer.Exit(1)


@app.command()
def preview():
    """Render the report to the console without touching Google Drive."""
    try:
        result = create_report_job(get_settings()).build_report()
    except ReportException as e:
        console.print(f"[red]✗[/red] Report failed: {e}")
        raise typer.Exit(1)

    _print_summary(result)
    console.print(result.content, markup=False, highlight=False, soft_wrap=True, end="")


@app.command()
def connect():
    """Authenticate with Google and store the token."""
    from irb_facility_report.google_drive.auth import create_auth_manager

    try:
        create_auth_manager().authenticate()
    except ReportException as e:
        console.print(f"[red]✗[/red] Authentication failed: {e}")
        raise typer.Exit(1)

    console.print("[green]✓[/green] Successfully authenticated with Google")


def main() -> None:
    """Zero-argument entry point."""
    setup_logging()
    app()


if __name__ == "__main__":
    main()
