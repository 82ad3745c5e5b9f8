from __future__ import annotations

import configparser
import io
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from gpxmerge.gpx.writer import DEFAULT_CREATOR
from gpxmerge.profile import DEFAULT_MAX_SAMPLES


DEFAULT_CHART_WIDTH = 1200
DEFAULT_CHART_HEIGHT = 400


@dataclass(frozen=True)
class AppConfig:
    max_profile_samples: int
    creator: str
    output_dir: Path
    chart_width: int
    chart_height: int


def _default_config_dir() -> Path:
    if os.name == "nt":
        base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / "gpxmerge"


def resolve_config_path(explicit: Path | None = None) -> Path:
    if explicit is not None:
        return explicit.expanduser()
    env_path = os.getenv("GPXMERGE_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return _default_config_dir() / "config.ini"


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def parse_positive_int(value: str | None, name: str, default: int) -> int:
    text = _clean(value)
    if text is None:
        return default
    try:
        parsed = int(text)
    except ValueError:
        raise ValueError(f"Invalid {name}: {value!r}") from None
    if parsed < 1:
        raise ValueError(f"Invalid {name}: {value!r} (must be at least 1)")
    return parsed


def load_app_config(
    config_path: Path | None = None, include_env: bool = True
) -> AppConfig:
    path = resolve_config_path(config_path)
    parser = configparser.ConfigParser()
    if path.is_file():
        parser.read(path)
    section = parser["default"] if parser.has_section("default") else {}

    max_samples = parse_positive_int(
        section.get("max_profile_samples"), "max_profile_samples", DEFAULT_MAX_SAMPLES
    )
    creator = _clean(section.get("creator")) or DEFAULT_CREATOR
    output_dir = Path(_clean(section.get("output_dir")) or ".").expanduser()
    chart_width = parse_positive_int(
        section.get("chart_width"), "chart_width", DEFAULT_CHART_WIDTH
    )
    chart_height = parse_positive_int(
        section.get("chart_height"), "chart_height", DEFAULT_CHART_HEIGHT
    )

    if include_env:
        max_samples = parse_positive_int(
            os.getenv("GPXMERGE_MAX_SAMPLES"), "GPXMERGE_MAX_SAMPLES", max_samples
        )
        creator = _clean(os.getenv("GPXMERGE_CREATOR")) or creator
        output_env = _clean(os.getenv("GPXMERGE_OUTPUT_DIR"))
        if output_env:
            output_dir = Path(output_env).expanduser()
        chart_width = parse_positive_int(
            os.getenv("GPXMERGE_CHART_WIDTH"), "GPXMERGE_CHART_WIDTH", chart_width
        )
        chart_height = parse_positive_int(
            os.getenv("GPXMERGE_CHART_HEIGHT"), "GPXMERGE_CHART_HEIGHT", chart_height
        )

    return AppConfig(
        max_profile_samples=max_samples,
        creator=creator,
        output_dir=output_dir,
        chart_width=chart_width,
        chart_height=chart_height,
    )


def save_app_config(config: AppConfig, config_path: Path | None = None) -> Path:
    path = resolve_config_path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    parser = configparser.ConfigParser()
    parser["default"] = {
        "max_profile_samples": str(config.max_profile_samples),
        "creator": config.creator,
        "output_dir": str(config.output_dir),
        "chart_width": str(config.chart_width),
        "chart_height": str(config.chart_height),
    }
    buffer = io.StringIO()
    parser.write(buffer)
    content = buffer.getvalue()
    if os.name == "posix":
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path
