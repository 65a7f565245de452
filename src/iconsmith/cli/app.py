"""CLI application entry point for iconsmith.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from iconsmith import __version__
from iconsmith.cli.output import (
    SYM_DOT,
    console,
    print_assignments,
    print_error,
    print_font_mapping,
    print_header,
    print_manifest_info,
    print_step,
    print_success,
    print_up_to_date,
)
from iconsmith.config import IconsmithSettings, LoggingConfig
from iconsmith.core import FontSynthesizer
from iconsmith.exceptions import IconsmithError, ManifestError
from iconsmith.io import (
    FontReader,
    IconSetResolver,
    font_output_path,
    is_up_to_date,
    load_manifest,
    write_codepoint_map,
    write_stamp,
)
from iconsmith.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="iconsmith",
    help="Build TrueType icon fonts from SVG glyph manifests.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Iconsmith[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build TrueType icon fonts from SVG glyph manifests."""


@app.command()
def build(
    manifest: Annotated[
        Path,
        typer.Argument(
            help="Path to the glyph manifest (TOML)",
            show_default=False,
        ),
    ],
    assets: Annotated[
        Path | None,
        typer.Option(
            "--assets",
            "-a",
            help="Directory of local SVG assets (default: manifest directory)",
        ),
    ] = None,
    icon_sets: Annotated[
        Path | None,
        typer.Option(
            "--icon-sets",
            "-i",
            help="Directory of Iconify JSON icon sets for [glyphs] entries",
        ),
    ] = None,
    map_out: Annotated[
        Path | None,
        typer.Option(
            "--map-out",
            "-m",
            help="Also write the identifier to codepoint map as JSON",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Rebuild even if the font is up to date",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Build the icon font declared by a manifest.

    Every glyph gets a Private Use Area codepoint starting at U+E000, in the
    order the manifest declares them.

    Example:
        iconsmith build icons.toml --assets assets/

    This will create icons.ttf next to icons.toml (named after the last
    segment of the manifest's module path).
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not manifest.is_file():
        print_error(
            f"Manifest not found: {manifest}",
            details=f"The file '{manifest}' does not exist or is not a file.",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = IconsmithSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    try:
        if not quiet:
            print_step("Loading manifest")

        resolver = IconSetResolver(icon_sets) if icon_sets is not None else None
        loaded = load_manifest(manifest, assets_dir=assets, resolver=resolver)
        collections = loaded.collections()

        if not quiet:
            print_manifest_info(
                manifest,
                loaded.module,
                {name: len(bucket) for name, bucket in collections.items()},
            )

        output_path = font_output_path(manifest, loaded.module)
        if not force and is_up_to_date(output_path, loaded.digest):
            if not quiet:
                print_up_to_date(str(output_path))
            raise typer.Exit(code=0)

        if not quiet:
            print_step("Synthesizing")

        synthesizer = FontSynthesizer(settings, logger=logger)
        written_path, result = synthesizer.build(manifest, loaded.module, collections)
        write_stamp(written_path, loaded.digest)

        if map_out is not None:
            write_codepoint_map(map_out, result.assignments)

        if not quiet:
            stats = synthesizer.stats
            codepoint_range = None
            if result.assignments:
                first, last = result.assignments[0], result.assignments[-1]
                codepoint_range = f"{first.label}–{last.label}"

            print_assignments(result.assignments, verbose=verbose)
            print_success(
                output_path=str(written_path),
                size_bytes=len(result.font_bytes),
                total_time_s=stats.duration_seconds,
                glyphs=stats.glyph_count,
                contours=stats.contour_count,
                codepoint_range=codepoint_range,
                avg_time_ms=stats.avg_glyph_time_ms,
            )
            if map_out is not None:
                console.print(f"  {SYM_DOT} codepoint map written to {map_out}")

    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except ManifestError as e:
        print_error(f"Invalid manifest: {e.reason}", details=e.path)
        raise typer.Exit(code=1)
    except IconsmithError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command("inspect")
def inspect_font(
    font: Annotated[
        Path,
        typer.Argument(
            help="Path to a TTF font built by iconsmith",
            show_default=False,
        ),
    ],
) -> None:
    """List the codepoints of an icon font and the glyphs they map to."""
    try:
        with FontReader(font) as reader:
            entries = list(reader.iter_mapped_glyphs())
            console.print(f"\n[bold]{reader.family_name or font.name}[/bold]")
            console.print(
                f"  {reader.glyph_count:,} glyphs {SYM_DOT} {reader.units_per_em:,} UPM "
                f"{SYM_DOT} {len(entries)} mapped"
            )
    except IconsmithError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_font_mapping(entries)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
