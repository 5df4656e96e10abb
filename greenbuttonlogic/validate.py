from __future__ import annotations
import numpy as np
import pandas as pd

from . import exceptions


def _float(s: pd.Series) -> np.ndarray:
    return pd.to_numeric(s, errors="coerce").astype("Float64").to_numpy(
        dtype=float, na_value=np.nan
    )


def assert_interval_frame(df: pd.DataFrame) -> None:
    """
    Check the derivation invariants of a frame built by formats.to_frame.

    Only the invariants whose columns are present are checked.
    """
    cols = set(df.columns)

    if {"start_epoch", "end_epoch", "duration"}.issubset(cols):
        start, end, dur = (_float(df[c]) for c in ("start_epoch", "end_epoch", "duration"))
        known = ~np.isnan(start) & ~np.isnan(dur)
        if np.isnan(end[known]).any() or (end[known] - start[known] != dur[known]).any():
            raise exceptions.ValidationError("end_epoch must equal start_epoch + duration.")

    if {"value_wh", "value_kwh"}.issubset(cols):
        wh, kwh = _float(df["value_wh"]), _float(df["value_kwh"])
        both = ~np.isnan(wh) & ~np.isnan(kwh)
        if not np.allclose(kwh[both], wh[both] / 1000.0):
            raise exceptions.ValidationError("value_kwh must equal value_wh / 1000.")

    if {"avg_kw", "duration"}.issubset(cols):
        avg, dur = _float(df["avg_kw"]), _float(df["duration"])
        no_duration = np.isnan(dur) | (dur <= 0)
        if (~np.isnan(avg[no_duration])).any():
            raise exceptions.ValidationError(
                "avg_kw must be empty when duration is zero or missing."
            )

    for col in ("t_start", "t_end"):
        if col in cols and not isinstance(df[col].dtype, pd.DatetimeTZDtype):
            raise exceptions.ValidationError(f"{col} must be tz-aware.")
