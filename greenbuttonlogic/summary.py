from __future__ import annotations
from typing import Dict, Iterable, List, Optional, TypedDict

from .types import IntervalRow


class ChannelSummary(TypedDict):
    unit: str
    kind: Optional[str]
    intervals: int
    total_kwh: Optional[float]  # None when no energy was derived


class SummaryPayload(TypedDict):
    rows: int
    first_start: Optional[int]
    last_end: Optional[int]
    channels: List[ChannelSummary]


def summarise(rows: Iterable[IntervalRow]) -> SummaryPayload:
    """Row count, covered epoch range and per-(unit, kind) totals."""
    rows = list(rows)
    starts = [r.start for r in rows if r.start is not None]
    ends = [r.end for r in rows if r.end is not None]

    channels: Dict[tuple, ChannelSummary] = {}
    for r in rows:
        key = (r.unit, r.kind)
        ch = channels.setdefault(
            key, {"unit": r.unit, "kind": r.kind, "intervals": 0, "total_kwh": None}
        )
        ch["intervals"] += 1
        if r.value_kwh is not None:
            ch["total_kwh"] = (ch["total_kwh"] or 0.0) + r.value_kwh

    return {
        "rows": len(rows),
        "first_start": min(starts) if starts else None,
        "last_end": max(ends) if ends else None,
        "channels": list(channels.values()),
    }
