#!/usr/bin/env python3
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) in sys.path:
    sys.path.remove(str(SRC_ROOT))
sys.path.insert(0, str(SRC_ROOT))

from barseries import BarSeriesError, build_chart, load_defaults, render_svg  # noqa: E402
from barseries.debug import write_debug_artifacts  # noqa: E402
from barseries.renderer import _load_params  # noqa: E402

app = typer.Typer(
    add_completion=False,
    help="Render bar series params into SVG, or inspect the resolved geometry.",
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _fail(exc: BarSeriesError) -> None:
    typer.echo(f"ERROR {exc.code}: {exc}", err=True)
    typer.echo(f"HINT: {exc.hint}", err=True)
    raise typer.Exit(code=1)


@app.command("render")
def render(
    params: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Chart params JSON or YAML file.",
    ),
    output_svg: Path = typer.Argument(
        ...,
        dir_okay=False,
        help="Output SVG path.",
    ),
    defaults: Path | None = typer.Option(
        None,
        "--defaults",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Optional render defaults YAML (see config/bar_defaults.v1.yaml).",
    ),
    debug_dir: Path | None = typer.Option(
        None,
        "--debug-dir",
        help="Optional directory to write geometry.json and overlay.png.",
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Logging level: debug, info, warning or error.",
    ),
) -> None:
    """Render a chart with its bar series to SVG."""
    _configure_logging(log_level)
    try:
        result = render_svg(params, output_svg, load_defaults(defaults))
    except BarSeriesError as exc:
        _fail(exc)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"ERROR E1199_UNEXPECTED: {exc}", err=True)
        typer.echo("HINT: Check input paths and params content.", err=True)
        raise typer.Exit(code=1)
    if debug_dir is not None:
        write_debug_artifacts(debug_dir, result)


@app.command()
def inspect(
    params: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Chart params JSON or YAML file.",
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        dir_okay=False,
        help="Optional path to write the summary JSON.",
    ),
    defaults: Path | None = typer.Option(
        None,
        "--defaults",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Optional render defaults YAML.",
    ),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        help="Logging level: debug, info, warning or error.",
    ),
) -> None:
    """Print resolved geometry, decoration counts and legend entries."""
    _configure_logging(log_level)
    try:
        result = build_chart(_load_params(params), load_defaults(defaults))
    except BarSeriesError as exc:
        _fail(exc)
    payload = json.dumps(result.summary(), indent=2, sort_keys=True)
    if out is not None:
        out.write_text(payload)
    typer.echo(payload)


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] not in {
        "render",
        "inspect",
        "-h",
        "--help",
    }:
        sys.argv.insert(1, "render")
    app(prog_name="barseries")
