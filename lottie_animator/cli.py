from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich import print
from rich.markup import escape
from rich.table import Table

from .config import AppConfig, load_config
from .exporter import export_to_lottie
from .timeline import KeyframeIndex, sample_layer
from .types import (
    AnimatableProperty,
    EllipseElement,
    Keyframe,
    Layer,
    Project,
    RectElement,
    Style,
    Transform,
)
from .utils import setup_logging, suggested_filename
from .validator import ExportValidationError, ensure_valid, validate_with_message

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)

CONFIG_ENV_VAR = "LOTTIE_ANIMATOR_CONFIG"


def _read_json(path: str) -> Any:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"File not found: {path}")
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def _load_project(path: str) -> Project:
    try:
        return Project.model_validate(_read_json(path))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise typer.BadParameter(f"Invalid project file {path}: {exc}") from exc


def _resolve_config(config: Optional[str]) -> Optional[AppConfig]:
    path = config or os.getenv(CONFIG_ENV_VAR)
    return load_config(path) if path else None


@app.command()
def export(
    project_path: str = typer.Argument(..., help="Editor project JSON"),
    output: Optional[str] = typer.Option(None, help="Output file; defaults to <output-dir>/<project name>.json"),
    output_dir: Optional[str] = typer.Option(None, help="Directory for the exported file"),
    name: Optional[str] = typer.Option(None, help="Filename to use when the project has no name"),
    indent: Optional[int] = typer.Option(None, help="JSON indentation; compact when unset"),
    allow_invalid: Optional[bool] = typer.Option(
        None, "--allow-invalid/--strict", help="Write the file even if validation fails"
    ),
    config: Optional[str] = typer.Option(None, help=f"Path to YAML config (or set {CONFIG_ENV_VAR})"),
    prefer_config: bool = typer.Option(False, help="If true, config overrides CLI when set"),
    log_level: Optional[str] = typer.Option(None, help="Logging level"),
):
    """Export an editor project to a Lottie JSON file."""
    load_dotenv()
    cfg = _resolve_config(config)

    def choose(val, cfg_val):
        if prefer_config and cfg_val is not None:
            return cfg_val
        return val if val is not None else cfg_val

    setup_logging(choose(log_level, cfg.log_level if cfg else None) or "WARNING")
    output_dir = choose(output_dir, cfg.output_dir if cfg else None) or "."
    default_name = choose(name, cfg.default_name if cfg else None) or "animation"
    indent = choose(indent, cfg.indent if cfg else None)
    cfg_allow = None if cfg is None or cfg.strict is None else not cfg.strict
    allow_invalid = bool(choose(allow_invalid, cfg_allow))

    project = _load_project(project_path)
    if not project.layers:
        raise typer.BadParameter("Project has no layers; add at least one layer before exporting.")

    try:
        document = export_to_lottie(project)
    except Exception as exc:
        logger.exception("Export of %r failed", project.name)
        print(f"[bold red]Export failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    try:
        ensure_valid(document)
    except ExportValidationError as exc:
        if not allow_invalid:
            print(f"[bold red]Export blocked.[/bold red] {escape(str(exc))}")
            raise typer.Exit(code=1)
        print(f"[yellow]Writing despite validation problems.[/yellow] {escape(str(exc))}")

    out_path = Path(output) if output else Path(output_dir) / suggested_filename(project.name, default_name)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(document, f, indent=indent)
    print(
        f"[bold green]Exported[/bold green] {len(document['layers'])} layers, "
        f"{document['op']} frames to {out_path}"
    )


@app.command()
def validate(
    lottie_path: str = typer.Argument(..., help="Lottie JSON file to check"),
):
    """Check a Lottie JSON file and list every problem found."""
    try:
        document = _read_json(lottie_path)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON in {lottie_path}: {exc}") from exc
    result = validate_with_message(document)
    if result.valid:
        print(f"[bold green]{escape(result.message)}[/bold green]")
        return
    print(f"[bold red]{escape(result.message)}[/bold red]")
    raise typer.Exit(code=1)


def _sample_project() -> Project:
    box = Layer(
        id="box",
        name="Box",
        element=RectElement(
            x=-50, y=-50, width=100, height=100,
            transform=Transform(x=100, y=300),
            style=Style(fill="#ff5050", stroke="#202020", stroke_width=4),
        ),
    )
    ball = Layer(
        id="ball",
        name="Ball",
        element=EllipseElement(
            x=-40, y=-40, width=80, height=80,
            transform=Transform(x=400, y=150),
            style=Style(fill="#50a0ff"),
        ),
    )
    keyframes = [
        Keyframe(id="box-x-0", time=0.0, property=AnimatableProperty.X, value=100, easing="ease-in-out", layer_id="box"),
        Keyframe(id="box-x-1", time=2.0, property=AnimatableProperty.X, value=700, easing="ease-in-out", layer_id="box"),
        Keyframe(id="box-r-0", time=0.0, property=AnimatableProperty.ROTATION, value=0, layer_id="box"),
        Keyframe(id="box-r-1", time=2.0, property=AnimatableProperty.ROTATION, value=360, layer_id="box"),
        Keyframe(id="ball-o-0", time=0.0, property=AnimatableProperty.OPACITY, value=0, easing="ease-out", layer_id="ball"),
        Keyframe(id="ball-o-1", time=1.0, property=AnimatableProperty.OPACITY, value=1, easing="ease-out", layer_id="ball"),
    ]
    return Project(name="Sample Animation", duration=2.0, layers=[box, ball], keyframes=keyframes)


@app.command()
def sample(
    output: str = typer.Option("./sample_project.json", help="Where to write the sample project"),
):
    """Write a small two-layer demo project."""
    project = _sample_project()
    p = Path(output)
    p.parent.mkdir(parents=True, exist_ok=True)
    data: Dict[str, Any] = project.model_dump(mode="json", by_alias=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    print(f"[bold green]Wrote sample project[/bold green] to {output}")


@app.command()
def inspect(
    project_path: str = typer.Argument(..., help="Editor project JSON"),
    time: float = typer.Option(0.0, help="Time in seconds"),
):
    """Show each layer's transform and opacity at a point in time."""
    project = _load_project(project_path)
    index = KeyframeIndex.from_keyframes(project.keyframes)

    table = Table(title=f"{project.name} @ {time:.2f}s")
    for column in ("Layer", "x", "y", "rotation", "scaleX", "scaleY", "opacity"):
        table.add_column(column)
    for layer in project.layers:
        s = sample_layer(index, layer, time)
        table.add_row(
            layer.name,
            *(f"{v:g}" for v in (s.x, s.y, s.rotation, s.scale_x, s.scale_y, s.opacity)),
        )
    print(table)


if __name__ == "__main__":
    app()
