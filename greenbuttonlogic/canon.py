from __future__ import annotations
from typing import Final, Dict

# Atom link @type prefix used by ESPI to declare the target entity kind
LINK_TYPE_PREFIX: Final[str] = "espi-entry/"

READING_TYPE: Final[str] = "ReadingType"
METER_READING: Final[str] = "MeterReading"
INTERVAL_BLOCK: Final[str] = "IntervalBlock"
LOCAL_TIME_PARAMETERS: Final[str] = "LocalTimeParameters"

DEFAULT_POWER_OF_TEN: Final[str] = "0"
DEFAULT_PROFILE: Final[str] = "interval"

WH_PER_KWH: Final[float] = 1000.0
SECONDS_PER_HOUR: Final[int] = 3600

# ESPI UnitSymbolKind codes -> human-readable names
UOM_NAMES: Dict[str, str] = {
    "38": "Watts",
    "72": "Watt-hours",
    "169": "Therms",
}

# ESPI MeasurementKind codes -> human-readable names
KIND_NAMES: Dict[str, str] = {
    "8": "demand",
    "12": "energy",
}

WATTS: Final[str] = "38"
WATT_HOURS: Final[str] = "72"

# Fixed decimals for derived columns in text output
DECIMALS: Dict[str, int] = {
    "value_wh": 3,
    "value_kwh": 6,
    "avg_kw": 6,
}

TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%SZ"

# Every column a profile may emit, in canonical order
ALL_COLS: Final[list[str]] = [
    "t_start",
    "t_end",
    "start_epoch",
    "end_epoch",
    "duration",
    "value_raw",
    "power_of_ten_multiplier",
    "value_scaled",
    "value_wh",
    "value_kwh",
    "avg_kw",
    "uom",
    "unit",
    "kind",
    "block_start_epoch",
    "block_duration",
    "tz_offset",
    "dst_offset",
]

INT_COLS: Final[list[str]] = [
    "start_epoch",
    "end_epoch",
    "duration",
    "value_raw",
    "power_of_ten_multiplier",
    "block_start_epoch",
    "block_duration",
    "tz_offset",
    "dst_offset",
]
FLOAT_COLS: Final[list[str]] = ["value_scaled", "value_wh", "value_kwh", "avg_kw"]
TIMESTAMP_COLS: Final[list[str]] = ["t_start", "t_end"]

# Integer columns are stored as pandas Int64
INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

# float64 covers roughly 1e-308 .. 1e308
MAX_POWER_OF_TEN: Final[int] = 308
