"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from glyphmesh.domain import ReconstructionResult

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for batch processing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Glyphmesh[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_server_info(host: str, port: int, reload: bool) -> None:
    """Print where the server is listening."""
    console.print(f"  http://{host}:{port} {SYM_DOT} docs at /docs")
    console.print(f"  auto-reload {'enabled' if reload else 'disabled'}")


def _format_time(ms: float) -> str:
    """Format milliseconds into human-readable time string."""
    if ms < 1000:
        return f"{ms:.1f}ms"
    seconds = ms / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    mins = int(seconds // 60)
    return f"{mins}m {seconds % 60:.1f}s"


def print_result_summary(result: ReconstructionResult) -> None:
    """Print a table describing one reconstruction.

    Args:
        result: Result to summarise
    """
    stats = result.stats
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()

    table.add_row("Character", Text(result.character or "-"))
    table.add_row("Canvas", f"{result.canvas_size} x {result.canvas_size}")
    table.add_row("Strategy", result.strategy)
    table.add_row("Ink pixels", f"{stats.ink_pixels:,}")

    if result.strategy == "contour":
        triangles = sum(m.triangle_count for m in result.meshes)
        table.add_row("Rings", f"{stats.raw_rings} traced {SYM_DOT} {stats.islands} islands")
        table.add_row(
            "Points", f"{stats.raw_points:,} raw {SYM_DOT} {stats.simplified_points:,} simplified"
        )
        table.add_row("Meshes", f"{len(result.meshes)} {SYM_DOT} {triangles:,} triangles")
        table.add_row("Outlines", str(len(result.outlines)))
    else:
        table.add_row("Blocks", f"{len(result.runs):,}")

    table.add_row("Time", _format_time(stats.duration_ms))
    console.print(table)


def print_success(message: str) -> None:
    """Print success line."""
    console.print(f"\n[bold green]{SYM_OK} {message}[/bold green]")


def print_batch_summary(
    processed: int,
    errors: int,
    total_time_s: float,
    avg_time_ms: float | None = None,
) -> None:
    """Print batch summary.

    Args:
        processed: Characters reconstructed successfully
        errors: Characters that failed
        total_time_s: Wall-clock time of the batch
        avg_time_ms: Average reconstruction time per character
    """
    console.print(
        f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s * 1000)}"
    )
    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} characters {SYM_DOT} [{error_style}]{errors} errors[/{error_style}]"
    )
    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg per character")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
