"""Rich console output helpers for the CLI.

This module provides user-friendly console output using the Rich library:
step markers, the codepoint table and the build summary.
"""

from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from iconsmith.domain import CodepointAssignment
from iconsmith.io import MappedGlyph

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info

# Rows shown before the table is cut short in non-verbose mode
PREVIEW_ROWS = 20


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Iconsmith[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_manifest_info(manifest_path: Path, module: str, collections: dict[str, int]) -> None:
    """Print what a manifest declares.

    Args:
        manifest_path: Path to the manifest
        module: Declared module path
        collections: Glyph count per collection
    """
    line = Text("  ")
    line.append(str(manifest_path))
    line.append(f" ({module})")
    console.print(line)

    total = sum(collections.values())
    breakdown = f" {SYM_DOT} ".join(f"{name} {count}" for name, count in collections.items())
    console.print(f"  {total:,} glyphs {SYM_DOT} {breakdown}" if breakdown else "  0 glyphs")


def print_assignments(assignments: Sequence[CodepointAssignment], verbose: bool) -> None:
    """Print the identifier to codepoint table.

    Args:
        assignments: Assignments in canonical order
        verbose: Show every row instead of the first few
    """
    rows = assignments if verbose else assignments[:PREVIEW_ROWS]
    table = Table(box=None, padding=(0, 2), show_edge=False)
    table.add_column("Codepoint", style="cyan")
    table.add_column("Identifier", style="bold")
    table.add_column("Collection")
    table.add_column("Glyph", justify="right")
    for assignment in rows:
        table.add_row(
            assignment.label,
            assignment.identifier,
            assignment.collection,
            str(assignment.glyph_id),
        )
    console.print(table)

    hidden = len(assignments) - len(rows)
    if hidden > 0:
        console.print(f"  {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{hidden} more, use --verbose)")


def print_font_mapping(entries: Sequence[MappedGlyph]) -> None:
    """Print the cmap of an inspected font.

    Args:
        entries: Mapped glyphs in codepoint order
    """
    table = Table(box=None, padding=(0, 2), show_edge=False)
    table.add_column("Codepoint", style="cyan")
    table.add_column("Glyph")
    table.add_column("Id", justify="right")
    table.add_column("Contours", justify="right")
    table.add_column("Bounds")
    for entry in entries:
        bounds = " ".join(str(v) for v in entry.bounds) if entry.bounds else "-"
        table.add_row(
            entry.label,
            entry.glyph_name,
            str(entry.glyph_id),
            str(entry.contours),
            bounds,
        )
    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def format_file_size(size_bytes: int) -> str:
    """Format a byte count in human-readable form (e.g., "12 KB")."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def print_success(
    output_path: str,
    size_bytes: int,
    total_time_s: float,
    glyphs: int,
    contours: int,
    codepoint_range: str | None = None,
    avg_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to the written font
        size_bytes: Size of the font in bytes
        total_time_s: Total synthesis time in seconds
        glyphs: Number of glyphs built
        contours: Total number of contours
        codepoint_range: "U+E000–U+E00F" style range, if any glyphs were built
        avg_time_ms: Average per-glyph time in milliseconds
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({format_file_size(size_bytes)})")
    console.print(line)

    stats = f"  {glyphs} glyphs {SYM_DOT} {contours} contours"
    if codepoint_range:
        stats += f" {SYM_DOT} {codepoint_range}"
    console.print(stats)

    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg per glyph")


def print_up_to_date(output_path: str) -> None:
    """Print the notice for a skipped build."""
    console.print(f"\n{SYM_DOT} [bold]Up to date[/bold] {output_path} (use --force to rebuild)")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
