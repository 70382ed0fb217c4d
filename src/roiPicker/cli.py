"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
import re
import sys
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.table import Table

from .core.coordinate_mapper import CoordinateMapper
from .core.display_metrics import ContainerGeometry, ImageDimensions, compute_display_metrics
from .core.export import ExportFormatter
from .core.selection import SelectionController
from .errors import (
    ImageLoadError,
    InvalidGeometryError,
    RoiPickerError,
    SelectionRejectedError,
)

app = typer.Typer(help="Read image pixel coordinates and export regions of interest")

_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*[x×X]\s*(\d+(?:\.\d+)?)\s*$")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (InvalidGeometryError, ImageLoadError, SelectionRejectedError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except RoiPickerError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def parse_size(text: str) -> tuple[float, float]:
    """Parse ``WIDTHxHEIGHT`` into a pair of non-negative numbers."""

    match = _SIZE_RE.match(text)
    if match is None:
        raise InvalidGeometryError(f"Expected WIDTHxHEIGHT, got {text!r}")
    return float(match.group(1)), float(match.group(2))


def parse_image_size(text: str) -> ImageDimensions:
    width, height = parse_size(text)
    if width <= 0 or height <= 0 or not width.is_integer() or not height.is_integer():
        raise InvalidGeometryError(f"Image size must be positive whole pixels, got {text!r}")
    return ImageDimensions(int(width), int(height))


def parse_point(text: str) -> tuple[float, float]:
    """Parse ``X,Y`` into a pair of floats."""

    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2:
        raise InvalidGeometryError(f"Expected X,Y, got {text!r}")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise InvalidGeometryError(f"Expected X,Y, got {text!r}") from exc


def _metrics_table(mapper: CoordinateMapper) -> Table:
    metrics = mapper.metrics
    table = Table(title="Display metrics", show_header=False)
    table.add_row("image", f"{mapper.image.width} × {mapper.image.height}")
    table.add_row("scale", f"{metrics.display_scale:.4f}")
    table.add_row("rendered", f"{metrics.rendered_width:g} × {metrics.rendered_height:g}")
    table.add_row("offset", f"({metrics.offset_x:g}, {metrics.offset_y:g})")
    return table


@app.command("open")
def open_image(
    image: Optional[Path] = typer.Argument(None, help="Image to open (JPEG or PNG)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Launch the desktop viewer, optionally opening IMAGE."""

    # Imported lazily so the headless commands never load Qt.
    from .gui.main import main as gui_main

    argv = [sys.argv[0]]
    if image is not None:
        argv.append(str(image))
    raise typer.Exit(gui_main(argv, log_level=logging.DEBUG if verbose else logging.INFO))


@app.command("map", context_settings={"ignore_unknown_options": True})
@_handle_errors
def map_point(
    image_size: str = typer.Argument(..., help="Natural image size, e.g. 800x600"),
    container_size: str = typer.Argument(..., help="Display surface size, e.g. 400x300"),
    x: float = typer.Argument(..., help="Pointer X in container pixels"),
    y: float = typer.Argument(..., help="Pointer Y in container pixels"),
) -> None:
    """Map a pointer position to image pixel and normalised coordinates.

    Negative positions are accepted as-is (`map 800x600 400x300 -10 50`);
    a `--` separator before X and Y works as well.
    """

    image = parse_image_size(image_size)
    container = ContainerGeometry(*parse_size(container_size))
    mapper = CoordinateMapper(image, compute_display_metrics(image, container))

    formatter = ExportFormatter()
    pixel = mapper.to_image_point(x, y)
    normalized = mapper.to_normalized_point(pixel)
    within = mapper.is_within_rendered_bounds(x, y)

    print(_metrics_table(mapper))
    print(f"pixel      {formatter.display_pixel(pixel)}")
    print(f"normalized {formatter.display_normalized(normalized)}")
    if not within:
        print("[yellow]pointer is outside the rendered image; coordinates are clamped[/yellow]")


@app.command("select")
@_handle_errors
def select_region(
    image_size: str = typer.Argument(..., help="Natural image size, e.g. 800x600"),
    container_size: str = typer.Argument(..., help="Display surface size, e.g. 400x300"),
    start: str = typer.Option(..., "--start", help="Drag start as X,Y in container pixels"),
    end: str = typer.Option(..., "--end", help="Drag end as X,Y in container pixels"),
    details: bool = typer.Option(False, "--details", help="Also print the pixel box"),
) -> None:
    """Simulate a drag and print the exported normalised bounding box."""

    image = parse_image_size(image_size)
    container = ContainerGeometry(*parse_size(container_size))
    start_x, start_y = parse_point(start)
    end_x, end_y = parse_point(end)

    controller = SelectionController()
    controller.set_image(image)
    controller.set_container(container)
    controller.enter_selection_mode()
    if not controller.on_pointer_down(start_x, start_y):
        raise SelectionRejectedError(f"Start point {start} is outside the rendered image")
    controller.on_pointer_move(end_x, end_y)
    controller.on_pointer_up()

    formatter = ExportFormatter()
    box = controller.committed_selection()
    if details and box is not None:
        table = Table(title="Selection")
        table.add_column("field")
        table.add_column("pixels", justify="right")
        table.add_column("normalized", justify="right")
        for name, (pixels, normalized) in formatter.display_box(box).items():
            table.add_row(name, str(pixels), normalized)
        print(table)
    typer.echo(formatter.format(box))


def main() -> None:  # pragma: no cover - console script
    app()


if __name__ == "__main__":  # pragma: no cover - manual launch
    main()
