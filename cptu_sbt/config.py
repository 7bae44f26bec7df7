"""Chart constants, series styles, and user-adjustable settings."""

from __future__ import annotations

import math
from dataclasses import dataclass


# Input columns (case-sensitive, matched by header name)
COLUMNS: tuple[str, ...] = ("depth", "qt", "fs", "u2", "sigma_vo_eff")

# Fr sampling grid (%), geometric to match the log x-axis
FR_GRID_START = 0.1
FR_GRID_STOP = 10.0
FR_GRID_RATIO = 1.1

# Boundary constants
CD_VALUE = 70.0
IB_VALUES: tuple[float, ...] = (22.0, 32.0)

CHART_TITLE = "Robertson SBT Chart (Qtn vs. Fr)"
X_AXIS_TITLE = "Fr (%)"
Y_AXIS_TITLE = "Qtn"


@dataclass(frozen=True)
class SeriesStyle:
    """Plotly styling for one chart series."""
    color: str
    width: float = 2.0
    dash: str = "solid"     # Plotly dash name: solid, dash, dot
    symbol: str = "circle"  # markers only
    size: float = 6.0       # markers only


DATA_STYLE = SeriesStyle(color="blue")

BOUNDARY_STYLES: dict[str, SeriesStyle] = {
    "CD = 70": SeriesStyle(color="red", dash="solid"),
    "IB = 22": SeriesStyle(color="green", dash="dash"),
    "IB = 32": SeriesStyle(color="orange", dash="dot"),
}

# Fallback cycle for IB values outside the default pair
_EXTRA_IB_COLORS = ["#9b59b6", "#3498db", "#8c564b", "#e377c2"]


def ib_label(ib_value: float) -> str:
    """Legend label for an IB curve, e.g. ``IB = 22``."""
    return f"IB = {ib_value:g}"


def cd_label(cd_value: float) -> str:
    return f"CD = {cd_value:g}"


def style_for(label: str, index: int = 0) -> SeriesStyle:
    """Look up a boundary style by legend label, cycling colors for unknown labels."""
    if label in BOUNDARY_STYLES:
        return BOUNDARY_STYLES[label]
    return SeriesStyle(color=_EXTRA_IB_COLORS[index % len(_EXTRA_IB_COLORS)], dash="dashdot")


@dataclass
class ChartSettings:
    """Settings for loading soundings and drawing the SBT chart."""
    delimiter: str | None = None        # None = sniff from the header line
    fr_start: float = FR_GRID_START
    fr_stop: float = FR_GRID_STOP
    fr_ratio: float = FR_GRID_RATIO
    ib_values: tuple[float, ...] = IB_VALUES
    marker_size: float = DATA_STYLE.size
    legend_x: float = 0.8
    legend_y: float = 1.0
    height: int = 600
    title: str = CHART_TITLE

    def __post_init__(self):
        if self.fr_start <= 0:
            raise ValueError(f"fr_start must be positive, got {self.fr_start}")
        if not math.isfinite(self.fr_stop):
            raise ValueError(f"fr_stop must be finite, got {self.fr_stop}")
        if self.fr_ratio <= 1.0:
            raise ValueError(f"fr_ratio must exceed 1.0, got {self.fr_ratio}")
