"""Sounding data model: raw CPTu records, normalized points, and datasets."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SoundingRecord:
    """One depth sample from a CPTu sounding.

    Units are taken as given and assumed consistent between columns;
    ``qt`` and ``sigma_vo_eff`` must share a stress unit for Qtn to be
    dimensionless.
    """
    depth: float
    qt: float               # corrected cone resistance
    fs: float               # sleeve friction
    u2: float               # pore pressure behind the cone
    sigma_vo_eff: float     # effective vertical stress


@dataclass(frozen=True)
class NormalizedPoint:
    """SBT chart coordinates for one record, with raw values carried along."""
    depth: float
    qt: float
    fs: float
    u2: float
    Qtn: float              # qt / sigma'_vo
    Fr: float               # 100 * fs / qt (%)


@dataclass(frozen=True)
class Dataset:
    """All records from one loaded sounding file.

    A new file produces a new Dataset; nothing is merged into an existing one.
    """
    records: tuple[SoundingRecord, ...] = ()
    source: str = ""
    warnings: tuple[str, ...] = field(default=())

    def __len__(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return len(self.records) == 0

    @classmethod
    def from_dicts(cls, rows: list[dict], source: str = "") -> Dataset:
        """Build a dataset from row dicts keyed by column name.

        Missing keys become NaN rather than raising, matching the
        non-validating contract of the normalizer.
        """
        nan = float("nan")
        records = tuple(
            SoundingRecord(
                depth=_as_float(row.get("depth", nan)),
                qt=_as_float(row.get("qt", nan)),
                fs=_as_float(row.get("fs", nan)),
                u2=_as_float(row.get("u2", nan)),
                sigma_vo_eff=_as_float(row.get("sigma_vo_eff", nan)),
            )
            for row in rows
        )
        return cls(records=records, source=source)


def _as_float(val) -> float:
    """Coerce to float; None and non-numeric text become NaN."""
    if val is None:
        return float("nan")
    try:
        return float(val)
    except (ValueError, TypeError):
        return float("nan")
