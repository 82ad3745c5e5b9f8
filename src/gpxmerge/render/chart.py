from __future__ import annotations

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from gpxmerge.profile import ElevationProfile  # noqa: E402

logger = logging.getLogger(__name__)

DPI = 100
AREA_COLOR = "tab:green"
MARKER_COLOR = "tab:orange"


def render_profile(
    profile: ElevationProfile,
    out_path: Path,
    *,
    width_px: int = 1200,
    height_px: int = 400,
    title: str | None = None,
) -> Path:
    """
    Draws the elevation profile as a filled area with waypoint markers and
    saves it as a PNG.
    """
    if profile.is_empty:
        raise ValueError("Elevation profile has no samples to render.")

    distances = [s.distance_km for s in profile.samples]
    elevations = [s.elevation_m for s in profile.samples]
    low, high = profile.y_range

    fig, ax = plt.subplots(figsize=(width_px / DPI, height_px / DPI), dpi=DPI)
    try:
        ax.fill_between(distances, elevations, low, color=AREA_COLOR, alpha=0.25)
        ax.plot(distances, elevations, color=AREA_COLOR, linewidth=1.5, label="Elevation")

        if profile.markers:
            ax.scatter(
                [m.distance_km for m in profile.markers],
                [m.elevation_m for m in profile.markers],
                color=MARKER_COLOR,
                zorder=3,
                label="Waypoints",
            )
            for marker in profile.markers:
                if marker.name:
                    ax.annotate(
                        marker.name,
                        (marker.distance_km, marker.elevation_m),
                        textcoords="offset points",
                        xytext=(0, 8),
                        ha="center",
                        fontsize=8,
                    )

        ax.set_ylim(low, high)
        ax.set_xlabel("Distance (km)")
        ax.set_ylabel("Elevation (m)")
        ax.grid(True, which="major", linestyle="--", alpha=0.5)
        if title:
            ax.set_title(title)
        ax.legend(loc="upper right", frameon=False)
        fig.tight_layout()

        out_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out_path, format="png")
    finally:
        plt.close(fig)

    logger.info("Saved elevation chart to %s", out_path)
    return out_path
