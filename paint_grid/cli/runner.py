"""CLI entry point for painting on a stored grid."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from ..config import Settings, load_settings, parse_palette
from ..grid import GridEngine
from ..state import GridStore, JSONFileKeyValueStore, PersistenceError
from ..utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(help="Paint on a persistent, windowed pixel grid")

STORE_HELP = "JSON file holding saved grids (defaults to PAINT_GRID_STORE_PATH)"
GRID_ID_HELP = "Grid to operate on (defaults to the most recently updated one)"


@app.command()
def new(
    viewport_size: Optional[int] = typer.Option(None, min=1, help="Side length of the editable window"),
    palette: Optional[str] = typer.Option(None, help="Comma separated color names"),
    store_path: Optional[Path] = typer.Option(None, help=STORE_HELP),
) -> None:
    """Start a fresh grid and make it the current one."""

    settings = _settings()
    store = _open_store(store_path, settings)
    try:
        if viewport_size is None and palette is None:
            current = store.load_most_recent()
            if current is not None:
                engine = GridEngine(current, store=store)
                engine.replace(engine.new_like())
                _report_unsaved(engine)
                typer.echo(engine.id)
                return
        colors = parse_palette(palette) if palette is not None else settings.palette
        if not colors:
            raise typer.BadParameter("Palette needs at least one color")
        engine = GridEngine.create(colors, viewport_size or settings.viewport_size, store=store)
    except PersistenceError as exc:
        _fail(str(exc))
    _report_unsaved(engine)
    typer.echo(engine.id)


@app.command()
def paint(
    x: int = typer.Argument(..., help="Column inside the viewport"),
    y: int = typer.Argument(..., help="Row inside the viewport"),
    color: int = typer.Argument(..., min=0, help="Palette index"),
    grid_id: Optional[str] = typer.Option(None, help=GRID_ID_HELP),
    store_path: Optional[Path] = typer.Option(None, help=STORE_HELP),
) -> None:
    """Paint one cell using viewport-local coordinates."""

    engine = _open_engine(store_path, grid_id)
    accepted = engine.set_value(x, y, color)
    typer.echo("painted" if accepted else "rejected")
    _report_unsaved(engine)


@app.command()
def move(
    dx: int = typer.Argument(..., help="Horizontal shift"),
    dy: int = typer.Argument(..., help="Vertical shift"),
    pages: bool = typer.Option(False, help="Interpret the shift in pages instead of cells"),
    grid_id: Optional[str] = typer.Option(None, help=GRID_ID_HELP),
    store_path: Optional[Path] = typer.Option(None, help=STORE_HELP),
) -> None:
    """Move the viewport, by cells or by pages."""

    engine = _open_engine(store_path, grid_id)
    accepted = engine.move_viewport_by_page(dx, dy) if pages else engine.move_viewport(dx, dy)
    if not accepted:
        typer.echo("rejected")
        return
    x, y = engine.viewport_corner
    typer.echo(f"{x} {y}")
    _report_unsaved(engine)


@app.command()
def show(
    grid_id: Optional[str] = typer.Option(None, help=GRID_ID_HELP),
    store_path: Optional[Path] = typer.Option(None, help=STORE_HELP),
) -> None:
    """Print the visible window, one character per cell."""

    engine = _open_engine(store_path, grid_id)
    for row in engine.visible_grid():
        typer.echo("".join(color[0] if color else "." for color in row))


@app.command()
def info(
    grid_id: Optional[str] = typer.Option(None, help=GRID_ID_HELP),
    store_path: Optional[Path] = typer.Option(None, help=STORE_HELP),
) -> None:
    """Print the stored extent and viewport corner."""

    engine = _open_engine(store_path, grid_id)
    typer.echo(json.dumps(engine.info().to_dict(), indent=2))


@app.command("list")
def list_grids(
    store_path: Optional[Path] = typer.Option(None, help=STORE_HELP),
) -> None:
    """List saved grid ids, most recently saved first."""

    store = _open_store(store_path, _settings())
    try:
        grid_ids = store.list_grid_ids()
    except PersistenceError as exc:
        _fail(str(exc))
    for grid_id in grid_ids:
        typer.echo(grid_id)


@app.command()
def export(
    output: Optional[Path] = typer.Option(None, help="File to write instead of stdout"),
    grid_id: Optional[str] = typer.Option(None, help=GRID_ID_HELP),
    store_path: Optional[Path] = typer.Option(None, help=STORE_HELP),
) -> None:
    """Write the grid as a self-contained JSON document."""

    engine = _open_engine(store_path, grid_id)
    document = engine.to_json()
    if output is None:
        typer.echo(document)
        return
    output.write_text(document, encoding="utf-8")
    typer.secho(f"Grid copied to {output}", fg=typer.colors.GREEN)


@app.command("import")
def import_grid(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="Exchange document to load"),
    store_path: Optional[Path] = typer.Option(None, help=STORE_HELP),
) -> None:
    """Load a grid from an exchange document and save it."""

    store = _open_store(store_path, _settings())
    engine = GridEngine.from_json(source.read_text(encoding="utf-8"), store=store)
    if engine is None:
        _fail("Failed to load grid")
    if not engine.save():
        _fail(f"Could not save grid: {engine.metrics.last_error}")
    logger.info("Imported grid %s", engine.id)
    typer.echo(engine.id)


def _settings() -> Settings:
    try:
        settings = load_settings()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    setup_logging(settings.log_level)
    return settings


def _open_store(store_path: Optional[Path], settings: Settings) -> GridStore:
    return GridStore(JSONFileKeyValueStore(store_path or settings.store_path))


def _open_engine(store_path: Optional[Path], grid_id: Optional[str]) -> GridEngine:
    settings = _settings()
    store = _open_store(store_path, settings)
    try:
        core = store.load_by_id(grid_id) if grid_id else store.load_most_recent()
        if core is not None:
            return GridEngine(core, store=store)
        if grid_id:
            raise typer.BadParameter(f"No saved grid with id {grid_id}")
        return GridEngine.create(settings.palette, settings.viewport_size, store=store)
    except PersistenceError as exc:
        _fail(str(exc))


def _report_unsaved(engine: GridEngine) -> None:
    if engine.metrics.failed_saves:
        typer.secho(f"Change not saved: {engine.metrics.last_error}", fg=typer.colors.YELLOW, err=True)


def _fail(message: str) -> NoReturn:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
