"""SBT chart assembly: data scatter plus boundary curves on log-log axes."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from .boundaries import fr_sampling_grid, standard_boundaries
from .config import DATA_STYLE, X_AXIS_TITLE, Y_AXIS_TITLE, ChartSettings, SeriesStyle
from .normalizer import normalize, points_to_frame
from .sounding import Dataset

logger = logging.getLogger(__name__)

DATA_SERIES_NAME = "CPTu Data"


class NoDataLoadedError(ValueError):
    """Raised when a chart is requested before a dataset is loaded."""

    def __init__(self, message: str = "No data to plot. Please load a file first."):
        super().__init__(message)


@dataclass
class ChartSeries:
    """One labelled series handed to the renderer."""
    name: str
    mode: str               # "markers" or "lines"
    style: SeriesStyle
    x: list[float] = field(default_factory=list)
    y: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.x)


def build_sbt_series(
    dataset: Dataset | None,
    settings: ChartSettings | None = None,
) -> list[ChartSeries]:
    """Data scatter followed by the boundary curves.

    Raises:
        NoDataLoadedError: If ``dataset`` is None or has no records.
    """
    if dataset is None or dataset.is_empty:
        raise NoDataLoadedError()
    settings = settings or ChartSettings()

    points = normalize(dataset.records)
    data_style = SeriesStyle(
        color=DATA_STYLE.color, symbol=DATA_STYLE.symbol, size=settings.marker_size,
    )
    series = [ChartSeries(
        name=DATA_SERIES_NAME,
        mode="markers",
        style=data_style,
        x=[p.Fr for p in points],
        y=[p.Qtn for p in points],
    )]

    grid = fr_sampling_grid(settings.fr_start, settings.fr_stop, settings.fr_ratio)
    for curve in standard_boundaries(grid, settings):
        series.append(ChartSeries(
            name=curve.name, mode="lines", style=curve.style, x=curve.fr, y=curve.qtn,
        ))

    logger.debug(
        "SBT chart for %s: %d points, %d grid samples",
        dataset.source or "<dataset>", len(points), len(grid),
    )
    return series


def _trace(s: ChartSeries) -> go.Scatter:
    if s.mode == "markers":
        return go.Scatter(
            x=s.x, y=s.y, mode="markers", name=s.name,
            marker=dict(size=s.style.size, color=s.style.color, symbol=s.style.symbol),
        )
    return go.Scatter(
        x=s.x, y=s.y, mode="lines", name=s.name,
        line=dict(color=s.style.color, width=s.style.width, dash=s.style.dash),
    )


def build_sbt_figure(
    dataset: Dataset | None,
    settings: ChartSettings | None = None,
) -> go.Figure:
    """Plotly SBT chart with both axes logarithmic."""
    settings = settings or ChartSettings()
    series = build_sbt_series(dataset, settings)

    fig = go.Figure()
    for s in series:
        fig.add_trace(_trace(s))

    axis = dict(type="log", autorange=True, mirror=True, ticks="outside", showline=True)
    fig.update_layout(
        title=settings.title,
        xaxis=dict(title=X_AXIS_TITLE, **axis),
        yaxis=dict(title=Y_AXIS_TITLE, **axis),
        legend=dict(x=settings.legend_x, y=settings.legend_y),
        height=settings.height,
    )
    return fig


def build_depth_profile_figure(dataset: Dataset | None) -> go.Figure:
    """Qtn and Fr against depth, sharing a downward depth axis."""
    if dataset is None or dataset.is_empty:
        raise NoDataLoadedError()
    points = normalize(dataset.records)
    depth = [p.depth for p in points]

    fig = make_subplots(
        rows=1, cols=2,
        subplot_titles=("Qtn", "Fr (%)"),
        shared_yaxes=True,
    )
    fig.add_trace(go.Scatter(
        x=[p.Qtn for p in points], y=depth, mode="lines+markers", name="Qtn",
        line=dict(color="blue", width=1), marker=dict(size=4),
    ), row=1, col=1)
    fig.add_trace(go.Scatter(
        x=[p.Fr for p in points], y=depth, mode="lines+markers", name="Fr",
        line=dict(color="red", width=1), marker=dict(size=4),
    ), row=1, col=2)

    fig.update_xaxes(type="log", row=1, col=1)
    fig.update_yaxes(title_text="Depth", autorange="reversed", row=1, col=1)
    fig.update_layout(height=600, showlegend=False, title_text="Normalized Parameters vs Depth")
    return fig


def _json_number(v: float) -> float | None:
    return v if math.isfinite(v) else None


def sbt_payload(
    dataset: Dataset | None,
    settings: ChartSettings | None = None,
) -> dict[str, Any]:
    """JSON-safe chart description; non-finite coordinates become null."""
    series = build_sbt_series(dataset, settings)
    return {
        "x_axis": {"title": X_AXIS_TITLE, "type": "log"},
        "y_axis": {"title": Y_AXIS_TITLE, "type": "log"},
        "series": [
            {
                "name": s.name,
                "mode": s.mode,
                "color": s.style.color,
                "dash": s.style.dash if s.mode == "lines" else None,
                "x": [_json_number(v) for v in s.x],
                "y": [_json_number(v) for v in s.y],
            }
            for s in series
        ],
    }


@dataclass
class ChartResult:
    """Figures and table from one plot request, tied to the dataset they show."""
    dataset: Dataset
    sbt_figure: go.Figure
    depth_figure: go.Figure
    table: pd.DataFrame

    @property
    def csv_name(self) -> str:
        stem = (self.dataset.source or "sounding").rsplit(".", 1)[0]
        return f"{stem}_sbt.csv"


def build_chart_result(
    dataset: Dataset | None,
    settings: ChartSettings | None = None,
) -> ChartResult:
    """Everything the chart page shows for ``dataset``, computed together."""
    sbt_figure = build_sbt_figure(dataset, settings)
    return ChartResult(
        dataset=dataset,
        sbt_figure=sbt_figure,
        depth_figure=build_depth_profile_figure(dataset),
        table=points_to_frame(normalize(dataset.records)),
    )
