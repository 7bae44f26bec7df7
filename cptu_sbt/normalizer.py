"""Normalized SBT parameters (Qtn, Fr) from raw CPTu records.

The normalizer does not validate its input. A zero ``sigma_vo_eff`` or
``qt`` yields IEEE-754 infinity or NaN instead of an exception, and those
values are passed through untouched: a log-scaled chart axis drops them on
its own, so every record keeps its place in the output.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from .sounding import NormalizedPoint, SoundingRecord


def normalized_cone_resistance(qt, sigma_vo_eff):
    """Qtn = qt / sigma'_vo (elementwise, IEEE division)."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return np.divide(np.asarray(qt, dtype=float), np.asarray(sigma_vo_eff, dtype=float))


def normalized_friction_ratio(fs, qt):
    """Fr = 100 * fs / qt in percent (elementwise, IEEE division)."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return np.divide(100.0 * np.asarray(fs, dtype=float), np.asarray(qt, dtype=float))


def normalize(records: Sequence[SoundingRecord]) -> list[NormalizedPoint]:
    """Map each record to its SBT coordinates, one output point per record.

    Args:
        records: Sounding records in depth (or file) order.

    Returns:
        NormalizedPoints in the same order as ``records``.
    """
    if len(records) == 0:
        return []

    qt = np.array([r.qt for r in records], dtype=float)
    fs = np.array([r.fs for r in records], dtype=float)
    sigma = np.array([r.sigma_vo_eff for r in records], dtype=float)

    Qtn = normalized_cone_resistance(qt, sigma)
    Fr = normalized_friction_ratio(fs, qt)

    return [
        NormalizedPoint(
            depth=r.depth,
            qt=r.qt,
            fs=r.fs,
            u2=r.u2,
            Qtn=float(Qtn[i]),
            Fr=float(Fr[i]),
        )
        for i, r in enumerate(records)
    ]


def points_to_frame(points: Sequence[NormalizedPoint]) -> pd.DataFrame:
    """Tabulate normalized points for display or CSV export."""
    return pd.DataFrame(
        [{
            "depth": p.depth,
            "qt": p.qt,
            "fs": p.fs,
            "u2": p.u2,
            "Qtn": p.Qtn,
            "Fr": p.Fr,
        } for p in points],
        columns=["depth", "qt", "fs", "u2", "Qtn", "Fr"],
    )
