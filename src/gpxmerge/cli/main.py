from __future__ import annotations

import argparse
import logging
import os
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table

from gpxmerge.config import (
    AppConfig,
    load_app_config,
    parse_positive_int,
    resolve_config_path,
    save_app_config,
)
from gpxmerge.errors import GPXError
from gpxmerge.gpx import GPXData, write_gpx
from gpxmerge.ingest import load_gpx_file
from gpxmerge.merge import merge_gpx
from gpxmerge.profile import build_profile
from gpxmerge.render import render_profile
from gpxmerge.summary import summarize

logger = logging.getLogger(__name__)

_DEBUG_VALUES = {"1", "true", "yes", "on"}


def _parse_log_level(value: str | None) -> int | None:
    if not value:
        return None
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else None


def configure_logging() -> None:
    level = _parse_log_level(os.getenv("GPXMERGE_LOG_LEVEL"))
    if level is None:
        debug = os.getenv("GPXMERGE_DEBUG", "").lower() in _DEBUG_VALUES
        level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _prompt_value(label: str, current, *, parser=None):
    while True:
        current_hint = "" if current is None else str(current)
        prompt = f"{label} [{current_hint}]: " if current_hint else f"{label}: "
        value = input(prompt)
        if not value.strip():
            return current
        if parser:
            try:
                return parser(value)
            except ValueError as exc:
                print(f"Invalid {label}: {exc}")
                continue
        return value


def _positive_int(label: str):
    def parse(value: str) -> int:
        return parse_positive_int(value, label, 0)

    return parse


def handle_configure(args: argparse.Namespace) -> None:
    config_path = resolve_config_path(args.config_path)
    current = load_app_config(config_path, include_env=False)

    for flag in ("max_samples", "chart_width", "chart_height"):
        value = getattr(args, flag)
        if value is not None and value < 1:
            raise SystemExit(f"--{flag.replace('_', '-')} must be at least 1.")

    updates: dict[str, object] = {}

    def set_value(field: str, value):
        if value is not None:
            updates[field] = value

    if args.non_interactive:
        set_value("max_profile_samples", args.max_samples)
        set_value("creator", args.creator)
        set_value("output_dir", args.output_dir)
        set_value("chart_width", args.chart_width)
        set_value("chart_height", args.chart_height)

        if not updates:
            raise SystemExit("No configuration values provided.")
    else:
        updates = {
            "max_profile_samples": (
                args.max_samples
                if args.max_samples is not None
                else _prompt_value(
                    "Max profile samples",
                    current.max_profile_samples,
                    parser=_positive_int("max_profile_samples"),
                )
            ),
            "creator": (
                args.creator
                if args.creator is not None
                else _prompt_value("GPX creator", current.creator)
            ),
            "output_dir": (
                args.output_dir
                if args.output_dir is not None
                else Path(
                    _prompt_value("Output directory", current.output_dir)
                ).expanduser()
            ),
            "chart_width": (
                args.chart_width
                if args.chart_width is not None
                else _prompt_value(
                    "Chart width (px)",
                    current.chart_width,
                    parser=_positive_int("chart_width"),
                )
            ),
            "chart_height": (
                args.chart_height
                if args.chart_height is not None
                else _prompt_value(
                    "Chart height (px)",
                    current.chart_height,
                    parser=_positive_int("chart_height"),
                )
            ),
        }

    updated = replace(current, **updates)
    path = save_app_config(updated, config_path)
    print(f"Saved config to {path}")


def load_files(
    paths: list[Path], console: Console
) -> tuple[list[GPXData], list[str]]:
    loaded: list[GPXData] = []
    failures: list[str] = []
    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
        transient=True,
    ) as progress:
        task_id = progress.add_task("Loading GPX files", total=len(paths))
        for path in paths:
            try:
                loaded.append(load_gpx_file(path))
            except GPXError as exc:
                logger.error("%s", exc)
                failures.append(str(path))
            except OSError as exc:
                logger.error("Cannot read %s: %s", path, exc)
                failures.append(str(path))
            progress.update(task_id, advance=1)
    return loaded, failures


def _summary_table(files: list[GPXData]) -> Table:
    table = Table(title="GPX files")
    table.add_column("Name")
    table.add_column("Tracks", justify="right")
    table.add_column("Waypoints", justify="right")
    table.add_column("Points", justify="right")
    table.add_column("Distance", justify="right")
    for data in files:
        summary = summarize(data)
        table.add_row(
            summary.name,
            str(summary.track_count),
            str(summary.waypoint_count),
            str(summary.point_count),
            f"{summary.distance_km:.1f} km",
        )
    return table


def handle_info(args: argparse.Namespace, console: Console) -> None:
    files, failures = load_files(args.files, console)
    if files:
        console.print(_summary_table(files))
    if failures:
        raise SystemExit(1)


def handle_merge(args: argparse.Namespace, config: AppConfig, console: Console) -> None:
    files, failures = load_files(args.files, console)
    if failures:
        raise SystemExit(1)

    merged = merge_gpx(files)
    out_path = args.out or config.output_dir / f"{merged.name}.gpx"
    write_gpx(merged, out_path, creator=config.creator)
    console.print(_summary_table([merged]))
    console.print(f"Saved merged GPX to {out_path}")


def handle_profile(
    args: argparse.Namespace, config: AppConfig, console: Console
) -> None:
    files, failures = load_files(args.files, console)
    if failures:
        raise SystemExit(1)

    max_samples = args.max_samples or config.max_profile_samples
    profile = build_profile(files, max_samples=max_samples)
    if profile.stats is None:
        logger.error("No elevation data or waypoints to profile.")
        raise SystemExit(1)

    stats = profile.stats
    table = Table(title="Elevation profile")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Distance", f"{stats.total_distance_km:.1f} km")
    table.add_row("Min elevation", f"{stats.min_elevation_m:.0f} m")
    table.add_row("Max elevation", f"{stats.max_elevation_m:.0f} m")
    table.add_row("Elevation gain", f"+{stats.gain_m:.0f} m")
    table.add_row("Elevation loss", f"-{stats.loss_m:.0f} m")
    table.add_row("Waypoints", str(len(profile.markers)))
    console.print(table)

    if args.out:
        title = " + ".join(data.name for data in files)
        render_profile(
            profile,
            args.out,
            width_px=config.chart_width,
            height_px=config.chart_height,
            title=title,
        )
        console.print(f"Saved elevation chart to {args.out}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gpxmerge",
        description="Merge GPX files and build elevation profiles.",
    )
    parser.add_argument(
        "--config-path",
        type=Path,
        default=None,
        help="Optional config file path override.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    configure = sub.add_parser(
        "configure", help="Configure default settings (stored on disk)."
    )
    configure.add_argument(
        "--max-samples",
        type=int,
        default=None,
        help="Maximum number of samples kept in an elevation profile.",
    )
    configure.add_argument(
        "--creator", type=str, default=None, help="Creator attribute for written GPX."
    )
    configure.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Default directory for merged GPX files.",
    )
    configure.add_argument(
        "--chart-width", type=int, default=None, help="Chart width in pixels."
    )
    configure.add_argument(
        "--chart-height", type=int, default=None, help="Chart height in pixels."
    )
    configure.add_argument(
        "--non-interactive",
        action="store_true",
        help="Do not prompt; only use provided flags.",
        default=False,
    )

    info = sub.add_parser("info", help="Show track, waypoint and distance totals.")
    info.add_argument("files", nargs="+", type=Path, help="GPX files.")

    merge = sub.add_parser("merge", help="Merge GPX files into one deduplicated file.")
    merge.add_argument("files", nargs="+", type=Path, help="GPX files (at least two).")
    merge.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output path. Defaults to <output_dir>/<merged name>.gpx.",
    )

    profile = sub.add_parser("profile", help="Build an elevation profile.")
    profile.add_argument("files", nargs="+", type=Path, help="GPX files.")
    profile.add_argument(
        "--out", type=Path, default=None, help="Write the chart to this PNG path."
    )
    profile.add_argument(
        "--max-samples",
        type=int,
        default=None,
        help="Override the configured sample cap.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "configure":
        handle_configure(args)
        return

    try:
        config = load_app_config(args.config_path)
    except ValueError as exc:
        parser.error(str(exc))
    console = Console()

    if args.command == "info":
        handle_info(args, console)
    elif args.command == "merge":
        if len(args.files) < 2:
            parser.error("merge needs at least two GPX files.")
        handle_merge(args, config, console)
    elif args.command == "profile":
        if args.max_samples is not None and args.max_samples < 1:
            parser.error("--max-samples must be at least 1.")
        handle_profile(args, config, console)


if __name__ == "__main__":
    main()
