# greenbuttonlogic/utils.py
from __future__ import annotations
from typing import Optional
from urllib.parse import urlsplit

import numpy as np
import pandas as pd
from lxml import etree

from . import canon


def text_or_none(node: Optional[etree._Element], path: str) -> Optional[str]:
    """Stripped text of the first match for `path`, or None if missing/empty."""
    if node is None:
        return None
    found = node.find(path)
    if found is None or found.text is None:
        return None
    text = found.text.strip()
    return text or None


def parse_int(text: Optional[str]) -> Optional[int]:
    """Integer value of `text`; None when absent, not an integer or outside int64."""
    if text is None:
        return None
    try:
        value = int(text)
    except ValueError:
        return None
    if not canon.INT64_MIN <= value <= canon.INT64_MAX:
        return None
    return value


def int_or_none(node: Optional[etree._Element], path: str) -> Optional[int]:
    return parse_int(text_or_none(node, path))


def entry_id(entry: etree._Element) -> Optional[str]:
    return text_or_none(entry, "./id")


def link_target_id(href: Optional[str], kind: str) -> Optional[str]:
    """
    Id of the `kind` entity addressed by an ESPI href.

    The id is the path segment immediately following the `kind` segment, e.g.
    ``.../MeterReading/urn:uuid:abc/IntervalBlock`` -> ``urn:uuid:abc`` for
    kind ``MeterReading``. Returns None when the marker is absent or is the
    last segment.
    """
    if not href:
        return None
    segments = urlsplit(href.strip()).path.split("/")
    for i, seg in enumerate(segments[:-1]):
        if seg == kind:
            target = segments[i + 1]
            return target or None
    return None


def link_kind(link_type: Optional[str]) -> Optional[str]:
    """'espi-entry/ReadingType' -> 'ReadingType'; None for other link types."""
    if not link_type or not link_type.startswith(canon.LINK_TYPE_PREFIX):
        return None
    return link_type[len(canon.LINK_TYPE_PREFIX) :] or None


def scale(value: Optional[int], power_of_ten: Optional[int]) -> Optional[float]:
    if value is None or power_of_ten is None:
        return None
    if abs(power_of_ten) > canon.MAX_POWER_OF_TEN:
        return None
    # integer arithmetic first so 12345 * 10**-1 == 1234.5 exactly
    try:
        if power_of_ten >= 0:
            return float(value * 10**power_of_ten)
        return value / 10**-power_of_ten
    except OverflowError:
        return None


def epoch_to_utc(epochs: pd.Series) -> pd.Series:
    """Unix seconds (nullable) -> tz-aware UTC timestamps; out-of-range becomes NaT."""
    nums = pd.to_numeric(epochs, errors="coerce").astype("Float64")
    secs = pd.Series(nums.to_numpy(dtype=float, na_value=np.nan), index=epochs.index)
    in_range = secs.between(pd.Timestamp.min.timestamp(), pd.Timestamp.max.timestamp())
    secs = secs.where(in_range)
    return pd.to_datetime(secs, unit="s", utc=True, errors="coerce")


def format_utc(ts: pd.Series) -> pd.Series:
    """UTC timestamps -> ISO-8601 strings; NaT becomes None."""
    return ts.map(lambda t: None if pd.isna(t) else t.strftime(canon.TIMESTAMP_FORMAT))


def format_fixed(values: pd.Series, decimals: int) -> pd.Series:
    return values.map(lambda v: None if pd.isna(v) else f"{v:.{decimals}f}")
