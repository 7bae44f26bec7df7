"""Sounding file loader.

Reads delimited text with a header row into a new :class:`Dataset`.
Parsing and type inference are left to pandas; this module only maps the
recognised columns onto records and reports what happened. A failed load
never returns a partial dataset.
"""

from __future__ import annotations

import asyncio
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
import pandas as pd

from .config import COLUMNS, ChartSettings
from .sounding import Dataset, SoundingRecord

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of loading one sounding file."""
    success: bool
    source: str
    dataset: Dataset | None = None
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


# ============================================================================
# Public API
# ============================================================================

def load_dataset(
    data: bytes | str | Path,
    source: str = "",
    settings: ChartSettings | None = None,
) -> LoadResult:
    """Parse a sounding file into a Dataset.

    Args:
        data: Raw file bytes, decoded text, or a filesystem path.
        source: Name shown to the user (defaults to the path name).
        settings: Delimiter choice; None sniffs it from the header line.

    Returns:
        LoadResult. ``dataset`` is set only when ``success`` is True.
    """
    settings = settings or ChartSettings()
    if isinstance(data, Path):
        source = source or data.name

    try:
        df = _read_table(data, settings.delimiter)
    except Exception as e:
        logger.warning("Failed to load %s: %s", source or "<upload>", e)
        return LoadResult(
            success=False,
            source=source,
            errors=[f"Could not parse file: {e}"],
        )

    warnings: list[str] = []
    records = _frame_to_records(df, warnings)
    dataset = Dataset(records=records, source=source, warnings=tuple(warnings))

    logger.info("Loaded %d records from %s", len(records), source or "<upload>")
    for w in warnings:
        logger.info("%s: %s", source or "<upload>", w)

    return LoadResult(success=True, source=source, dataset=dataset, warnings=warnings)


async def load_dataset_async(
    data: bytes | str | Path,
    source: str = "",
    settings: ChartSettings | None = None,
) -> LoadResult:
    """Awaitable :func:`load_dataset`; the parse runs in a worker thread."""
    return await asyncio.to_thread(load_dataset, data, source, settings)


def install_dataset(current: Dataset | None, result: LoadResult) -> Dataset | None:
    """Dataset to keep after a load: the new one on success, else ``current``."""
    if result.success and result.dataset is not None:
        return result.dataset
    return current


# ============================================================================
# Helpers
# ============================================================================

def _read_table(data: bytes | str | Path, delimiter: str | None) -> pd.DataFrame:
    if isinstance(data, bytes):
        buf = io.BytesIO(data)
    elif isinstance(data, str):
        buf = io.StringIO(data)
    else:
        buf = data

    if delimiter is None:
        return pd.read_csv(buf, sep=None, engine="python")
    return pd.read_csv(buf, sep=delimiter)


def _frame_to_records(df: pd.DataFrame, warnings: list[str]) -> tuple[SoundingRecord, ...]:
    columns: dict[str, np.ndarray] = {}
    for col in COLUMNS:
        if col not in df.columns:
            warnings.append(f"Column '{col}' not found; values set to NaN")
            columns[col] = np.full(len(df), np.nan)
            continue
        values = pd.to_numeric(df[col], errors="coerce")
        n_bad = int(values.isna().sum() - df[col].isna().sum())
        if n_bad > 0:
            warnings.append(f"Column '{col}': {n_bad} non-numeric value(s) read as NaN")
        columns[col] = values.to_numpy(dtype=float)

    return tuple(
        SoundingRecord(
            depth=float(columns["depth"][i]),
            qt=float(columns["qt"][i]),
            fs=float(columns["fs"][i]),
            u2=float(columns["u2"][i]),
            sigma_vo_eff=float(columns["sigma_vo_eff"][i]),
        )
        for i in range(len(df))
    )
