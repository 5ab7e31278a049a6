"""CLI application entry point for glyphmesh.

This module provides the main CLI interface using Typer.
"""

import json
import os
from pathlib import Path
from typing import Annotated

import typer

from glyphmesh import __version__
from glyphmesh.cli.output import (
    console,
    create_progress,
    print_batch_summary,
    print_error,
    print_header,
    print_result_summary,
    print_server_info,
    print_step,
    print_success,
)
from glyphmesh.config import GlyphMeshSettings, Strategy, get_default_settings
from glyphmesh.core import BatchProcessor, GlyphPipeline
from glyphmesh.exceptions import ConfigurationError, GlyphMeshError
from glyphmesh.io import GlyphRasterizer
from glyphmesh.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="glyphmesh",
    help="Turn a rendered character into 3D-buildable geometry.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Glyphmesh[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
    """Turn a rendered character into 3D-buildable geometry."""


def _settings_with_fonts(fonts: list[Path] | None) -> GlyphMeshSettings:
    try:
        settings = get_default_settings()
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=2) from None
    if fonts:
        settings.raster.font_paths = [*fonts, *settings.raster.font_paths]
    return settings


@app.command()
def serve(
    host: Annotated[
        str | None,
        typer.Option("--host", help="Interface to bind (default from settings)"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Port to listen on (default from settings)", min=1, max=65535),
    ] = None,
    reload: Annotated[
        bool,
        typer.Option("--reload", help="Enable auto-reload for development"),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR, default from settings)"
        ),
    ] = None,
) -> None:
    """Run the HTTP API server."""
    import uvicorn

    # The app factory configures logging from settings, possibly in a reload subprocess
    if log_level:
        os.environ["GLYPHMESH_LOGGING__LOG_LEVEL"] = log_level.upper()

    settings = _settings_with_fonts(None)
    bind_host = host or settings.server.host
    bind_port = port or settings.server.port

    print_header(__version__)
    print_step("Starting server")
    print_server_info(bind_host, bind_port, reload)

    uvicorn.run(
        "glyphmesh.api.server:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.logging.log_level.lower(),
    )


@app.command()
def render(
    character: Annotated[
        str,
        typer.Argument(help="Character to reconstruct (first character is used)", show_default=False),
    ],
    strategy: Annotated[
        Strategy,
        typer.Option("--strategy", "-s", help="Reconstruction strategy"),
    ] = Strategy.CONTOUR,
    resolution: Annotated[
        int | None,
        typer.Option("--resolution", "-r", help="Canvas size in pixels (clamped)"),
    ] = None,
    threshold: Annotated[
        int | None,
        typer.Option("--threshold", "-t", help="Luminance threshold 0-255 (clamped)"),
    ] = None,
    epsilon: Annotated[
        float | None,
        typer.Option("--epsilon", "-e", help="Simplification tolerance in pixels", min=0.0),
    ] = None,
    font: Annotated[
        list[Path] | None,
        typer.Option("--font", "-f", help="Font file to try first (repeatable)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the JSON payload to this file"),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
) -> None:
    """Reconstruct one character and print a summary.

    Example:
        glyphmesh render A --strategy greedy --resolution 256 -o a.json
    """
    settings = _settings_with_fonts(font)
    if epsilon is not None:
        settings.reconstruction.simplify_epsilon = epsilon

    configure_logging(
        log_file=settings.logging.log_file,
        console_level="WARNING",
        quiet=quiet,
        json_output=settings.logging.json_output,
    )

    if not quiet:
        print_header(__version__)
        print_step(f"Reconstructing {character[:1]!r}")

    try:
        pipeline = GlyphPipeline(settings.reconstruction, GlyphRasterizer(settings.raster))
        result = pipeline.reconstruct(character, resolution, threshold, strategy)
    except GlyphMeshError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)

    if not quiet:
        print_result_summary(result)

    if output is not None:
        output.write_text(
            json.dumps({"success": True, **result.to_dict()}, ensure_ascii=False),
            encoding="utf-8",
        )
        if not quiet:
            print_success(f"Wrote {output}")


@app.command()
def batch(
    characters: Annotated[
        str,
        typer.Argument(help="Characters to reconstruct, e.g. 'ABCあい'", show_default=False),
    ],
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for one JSON file per character"),
    ] = Path("glyphmesh-output"),
    strategy: Annotated[
        Strategy,
        typer.Option("--strategy", "-s", help="Reconstruction strategy"),
    ] = Strategy.CONTOUR,
    resolution: Annotated[
        int | None,
        typer.Option("--resolution", "-r", help="Canvas size in pixels (clamped)"),
    ] = None,
    threshold: Annotated[
        int | None,
        typer.Option("--threshold", "-t", help="Luminance threshold 0-255 (clamped)"),
    ] = None,
    font: Annotated[
        list[Path] | None,
        typer.Option("--font", "-f", help="Font file to try first (repeatable)"),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-j", help="Number of parallel workers (default: auto)", min=1),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
) -> None:
    """Reconstruct many characters in parallel, one JSON file each.

    Files are named after the code point, e.g. U+0041.json for "A".
    """
    if not characters:
        print_error("No characters given")
        raise typer.Exit(code=1)

    settings = _settings_with_fonts(font)
    if quiet:
        settings.logging.log_level = "ERROR"
    else:
        settings.logging.log_level = "WARNING"

    if not quiet:
        print_header(__version__)
        print_step(f"Processing {len(set(characters))} characters")

    output_dir.mkdir(parents=True, exist_ok=True)
    processor = BatchProcessor(settings)

    try:
        if not quiet:
            with create_progress() as progress:
                task_id = progress.add_task("Reconstructing", total=len(set(characters)))

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                results, stats = processor.process(
                    characters,
                    resolution=resolution,
                    threshold=threshold,
                    strategy=strategy.value,
                    max_workers=workers,
                    progress_callback=update_progress,
                )
        else:
            results, stats = processor.process(
                characters,
                resolution=resolution,
                threshold=threshold,
                strategy=strategy.value,
                max_workers=workers,
            )
    except KeyboardInterrupt:
        print_error("Cancelled")
        raise typer.Exit(code=130) from None

    for char, payload in results.items():
        path = output_dir / f"U+{ord(char):04X}.json"
        path.write_text(
            json.dumps({"success": True, **payload}, ensure_ascii=False), encoding="utf-8"
        )

    if not quiet:
        print_batch_summary(
            processed=stats.processed_count,
            errors=stats.error_count,
            total_time_s=stats.duration_seconds,
            avg_time_ms=stats.avg_time_ms,
        )
        for char, message in stats.errors:
            print_error(f"{char!r}: {message}")

    if stats.error_count:
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
