from __future__ import annotations
from typing import Dict, Optional, Tuple
from dataclasses import dataclass, field

from pydantic import BaseModel


## Feed entities
class ReadingType(BaseModel):
    """Semantics of a measurement stream.

    Attributes:
        id: Feed entry id (usually a ``urn:uuid:...``)
        uom: ESPI unit-of-measure code, e.g. "72" for Wh
        power_of_ten_multiplier: Raw values are scaled by 10**multiplier.
            None when the element is present but not an integer.
        kind: ESPI measurement kind code, e.g. "12" for energy
    """

    id: str
    uom: Optional[str] = None
    power_of_ten_multiplier: Optional[int] = 0
    kind: Optional[str] = None
    interval_length: Optional[int] = None
    accumulation_behaviour: Optional[str] = None
    commodity: Optional[str] = None
    flow_direction: Optional[str] = None
    model_config = {"frozen": True}


class MeterReading(BaseModel):
    id: str
    reading_type_id: Optional[str] = None  # filled in by the resolver
    model_config = {"frozen": True}


class IntervalReading(BaseModel):
    start: Optional[int] = None  # unix seconds
    duration: Optional[int] = None  # seconds
    value: Optional[int] = None
    model_config = {"frozen": True}

    @property
    def end(self) -> Optional[int]:
        if self.start is None or self.duration is None:
            return None
        end = self.start + self.duration
        # start and duration are each int64-bounded; their sum may not be
        return end if -(2**63) <= end < 2**63 else None


class IntervalBlock(BaseModel):
    entry_id: Optional[str] = None
    meter_reading_id: Optional[str] = None
    interval_start: Optional[int] = None
    interval_duration: Optional[int] = None
    readings: Tuple[IntervalReading, ...] = ()
    model_config = {"frozen": True}


class LocalTimeParameters(BaseModel):
    """Offsets in seconds, surfaced as-is (no DST rule evaluation)."""

    tz_offset: Optional[int] = None
    dst_offset: Optional[int] = None
    model_config = {"frozen": True}


@dataclass
class FeedEntities:
    reading_types: Dict[str, ReadingType] = field(default_factory=dict)
    meter_readings: Dict[str, MeterReading] = field(default_factory=dict)
    local_time: Optional[LocalTimeParameters] = None

    def reading_type_for(self, meter_reading_id: Optional[str]) -> Optional[ReadingType]:
        """Follow MeterReading -> ReadingType; None if any hop is missing."""
        if meter_reading_id is None:
            return None
        mr = self.meter_readings.get(meter_reading_id)
        if mr is None or mr.reading_type_id is None:
            return None
        return self.reading_types.get(mr.reading_type_id)


## Output
class IntervalRow(BaseModel):
    """One denormalised output record per IntervalReading."""

    start: Optional[int] = None
    end: Optional[int] = None
    duration: Optional[int] = None
    value: Optional[int] = None
    power_of_ten_multiplier: Optional[int] = None
    scaled_value: Optional[float] = None
    uom: Optional[str] = None
    unit: str
    kind: Optional[str] = None
    value_wh: Optional[float] = None
    value_kwh: Optional[float] = None
    avg_kw: Optional[float] = None
    block_start: Optional[int] = None
    block_duration: Optional[int] = None
    tz_offset: Optional[int] = None
    dst_offset: Optional[int] = None
    meter_reading_id: Optional[str] = None
    reading_type_id: Optional[str] = None
    model_config = {"frozen": True}


## Conversion profiles
@dataclass(frozen=True)
class ConversionProfile:
    name: str
    supported_uoms: frozenset[str]
    energy_uoms: frozenset[str] = frozenset()  # derive Wh/kWh/avg kW for these
    columns: Tuple[str, ...] = ()
