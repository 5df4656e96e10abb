from __future__ import annotations
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from . import canon, exceptions, utils
from .profiles import resolve_profile
from .types import ConversionProfile, IntervalRow

# IntervalRow field -> output column
FIELD_COLS = {
    "start": "start_epoch",
    "end": "end_epoch",
    "duration": "duration",
    "value": "value_raw",
    "power_of_ten_multiplier": "power_of_ten_multiplier",
    "scaled_value": "value_scaled",
    "value_wh": "value_wh",
    "value_kwh": "value_kwh",
    "avg_kw": "avg_kw",
    "uom": "uom",
    "unit": "unit",
    "kind": "kind",
    "block_start": "block_start_epoch",
    "block_duration": "block_duration",
    "tz_offset": "tz_offset",
    "dst_offset": "dst_offset",
}


def _full_frame(rows: Iterable[IntervalRow]) -> pd.DataFrame:
    records = [r.model_dump(include=set(FIELD_COLS)) for r in rows]
    df = pd.DataFrame.from_records(records, columns=list(FIELD_COLS))
    df = df.rename(columns=FIELD_COLS)

    for col in canon.INT_COLS:
        df[col] = df[col].astype("Int64")
    for col in canon.FLOAT_COLS:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)

    df["t_start"] = utils.epoch_to_utc(df["start_epoch"])
    df["t_end"] = utils.epoch_to_utc(df["end_epoch"])
    return df[canon.ALL_COLS]


def to_frame(
    rows: Iterable[IntervalRow],
    profile: Optional[ConversionProfile | str] = None,
) -> pd.DataFrame:
    """
    Shape interval rows into a DataFrame with exactly the profile's columns.

      - t_start / t_end: tz-aware UTC timestamps
      - *_epoch, duration, value_raw, offsets: nullable Int64
      - value_scaled / value_wh / value_kwh / avg_kw: float (NaN when absent)
    """
    prof = resolve_profile(profile)
    df = _full_frame(rows)
    return df[list(prof.columns)].copy()


def _number_text(v: float) -> Optional[str]:
    if pd.isna(v):
        return None
    return str(int(v)) if float(v).is_integer() else repr(float(v))


def to_text_frame(df: pd.DataFrame) -> pd.DataFrame:
    """String rendering used for CSV: ISO UTC timestamps and fixed decimals."""
    out = df.copy()
    for col in canon.TIMESTAMP_COLS:
        if col in out.columns:
            out[col] = utils.format_utc(out[col])
    for col, decimals in canon.DECIMALS.items():
        if col in out.columns:
            out[col] = utils.format_fixed(out[col], decimals)
    if "value_scaled" in out.columns:
        out["value_scaled"] = out["value_scaled"].map(_number_text)
    return out


def to_csv_text(
    rows: Iterable[IntervalRow],
    profile: Optional[ConversionProfile | str] = None,
) -> str:
    text_df = to_text_frame(to_frame(rows, profile))
    return text_df.to_csv(index=False, na_rep="", lineterminator="\n")


def write_csv(
    rows: Iterable[IntervalRow],
    path: str | Path,
    profile: Optional[ConversionProfile | str] = None,
) -> None:
    text = to_csv_text(rows, profile)
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as e:
        raise exceptions.OutputError(f"Cannot write output file {path}: {e}") from e
