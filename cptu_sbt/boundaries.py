"""SBT chart boundary curves traced over a sampled Fr domain.

Two kinds of boundary are drawn:

* the CD = 70 line, an explicit function of Fr evaluated at every sample;
* the IB = k family, obtained by solving the implicit index relation
  ``IB = 100 (Qtn + 10) / (70 + Qtn Fr)`` for Qtn.

IB curves have an asymptote at ``Fr = 100 / IB`` and turn negative beyond
it. Samples at the asymptote or with non-positive Qtn are left out, so a
polyline breaks there instead of joining the two branches. None of the
functions here raise for numeric input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from .config import (
    CD_VALUE,
    FR_GRID_RATIO,
    FR_GRID_START,
    FR_GRID_STOP,
    ChartSettings,
    SeriesStyle,
    cd_label,
    ib_label,
    style_for,
)


@dataclass
class BoundaryCurve:
    """A named, styled polyline on the SBT chart."""
    name: str
    style: SeriesStyle
    fr: list[float] = field(default_factory=list)
    qtn: list[float] = field(default_factory=list)

    @property
    def points(self) -> list[tuple[float, float]]:
        return list(zip(self.fr, self.qtn))

    def __len__(self) -> int:
        return len(self.fr)


# ---------------------------------------------------------------------------
# Sampling grid
# ---------------------------------------------------------------------------

def fr_sampling_grid(
    start: float = FR_GRID_START,
    stop: float = FR_GRID_STOP,
    ratio: float = FR_GRID_RATIO,
) -> list[float]:
    """Geometric Fr samples from ``start`` while the value is <= ``stop``.

    Each value is the previous one times ``ratio`` (accumulated, not
    ``start * ratio**k``), and the upper bound is not inserted, so the last
    sample is whatever the multiplication lands on below ``stop``.
    """
    if start <= 0 or ratio <= 1.0 or not math.isfinite(stop):
        return []
    values = []
    val = start
    while val <= stop:
        values.append(val)
        val *= ratio
    return values


# ---------------------------------------------------------------------------
# Boundary equations
# ---------------------------------------------------------------------------

def cd_qtn(fr, cd_value: float = CD_VALUE):
    """Qtn on the CD line: 11 + CD / (1 + 0.06 Fr)^17."""
    fr = np.asarray(fr, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return 11.0 + cd_value / np.power(1.0 + 0.06 * fr, 17)


def ib_index(qtn, fr):
    """Forward IB index: 100 (Qtn + 10) / (70 + Qtn Fr)."""
    qtn = np.asarray(qtn, dtype=float)
    fr = np.asarray(fr, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return 100.0 * (qtn + 10.0) / (70.0 + qtn * fr)


def boundary_cd70(fr_values: Sequence[float]) -> tuple[list[float], list[float]]:
    """(Fr, Qtn) samples of the CD = 70 line, one per input Fr."""
    fr = np.asarray(fr_values, dtype=float)
    if fr.size == 0:
        return [], []
    qtn = cd_qtn(fr, CD_VALUE)
    return fr.tolist(), qtn.tolist()


def boundary_ib(ib_value: float, fr_values: Sequence[float]) -> tuple[list[float], list[float]]:
    """(Fr, Qtn) samples of the IB = ``ib_value`` curve.

    Qtn = (1000 - 70 IB) / (IB Fr - 100). A sample is omitted when the
    denominator is exactly zero or when Qtn is not strictly positive.
    """
    fr = np.asarray(fr_values, dtype=float)
    if fr.size == 0:
        return [], []

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        numerator = 1000.0 - 70.0 * ib_value
        denominator = ib_value * fr - 100.0
        qtn = np.divide(numerator, denominator)
        keep = (denominator != 0) & (qtn > 0)

    return fr[keep].tolist(), qtn[keep].tolist()


# ---------------------------------------------------------------------------
# Chart set
# ---------------------------------------------------------------------------

def standard_boundaries(
    fr_values: Sequence[float] | None = None,
    settings: ChartSettings | None = None,
) -> list[BoundaryCurve]:
    """CD = 70 followed by one IB curve per configured IB value."""
    settings = settings or ChartSettings()
    if fr_values is None:
        fr_values = fr_sampling_grid(settings.fr_start, settings.fr_stop, settings.fr_ratio)

    curves: list[BoundaryCurve] = []

    label = cd_label(CD_VALUE)
    fr, qtn = boundary_cd70(fr_values)
    curves.append(BoundaryCurve(name=label, style=style_for(label), fr=fr, qtn=qtn))

    for i, ib in enumerate(settings.ib_values):
        label = ib_label(ib)
        fr, qtn = boundary_ib(ib, fr_values)
        curves.append(BoundaryCurve(name=label, style=style_for(label, i), fr=fr, qtn=qtn))

    return curves
