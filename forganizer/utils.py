"""
Console helpers for the file organizer.

Includes:
- Styled header / error / warning / success lines
- Run summary table
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# Global console instance
console = Console(highlight=False)


def print_header(title: str, subtitle: str = "", out: Console | None = None):
    """Print a styled header."""
    out = out or console
    out.print(Panel(f"[bold blue]{escape(title)}[/bold blue]\n[italic]{escape(subtitle)}[/italic]", expand=False))


def print_error(msg: str, out: Console | None = None):
    (out or console).print(f"[bold red]ERROR:[/bold red] {escape(msg)}")


def print_warning(msg: str, out: Console | None = None):
    (out or console).print(f"[bold yellow]WARNING:[/bold yellow] {escape(msg)}")


def print_success(msg: str, out: Console | None = None):
    (out or console).print(f"[bold green]SUCCESS:[/bold green] {escape(msg)}")


def print_summary_table(report, out: Console | None = None):
    """Print a summary table of a finished run."""
    out = out or console

    table = Table(title="Run Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="magenta")

    table.add_row("Directories", str(report.directories))
    table.add_row("Moved", str(report.moved))
    table.add_row("Renamed", str(report.renamed))
    table.add_row("Merged (source removed)", str(report.merged))
    table.add_row("Skipped", str(report.skipped))
    table.add_row("Too new", str(report.too_new))
    table.add_row("Errors", str(report.errors))

    out.print(table)

    if report.error_messages:
        out.print("\n[bold red]Errors encountered:[/bold red]")
        for err in report.error_messages[:5]:
            out.print(f"  - {escape(err)}")
        if len(report.error_messages) > 5:
            out.print(f"  ... and {len(report.error_messages) - 5} more")
