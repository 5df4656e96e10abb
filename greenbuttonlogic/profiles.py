from __future__ import annotations
from typing import Dict, Optional

from . import canon, exceptions
from .types import ConversionProfile


BASIC_COLS = (
    "start_epoch",
    "end_epoch",
    "duration",
    "value_raw",
    "uom",
    "unit",
    "kind",
)

ENERGY_COLS = (
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
)

INTERVAL_COLS = ENERGY_COLS + ("tz_offset", "dst_offset")


PROFILES: Dict[str, ConversionProfile] = {
    # Raw readings for power and energy channels, nothing derived
    "basic": ConversionProfile(
        name="basic",
        supported_uoms=frozenset({canon.WATTS, canon.WATT_HOURS}),
        columns=BASIC_COLS,
    ),
    # Wh channels only, with kWh and average kW
    "energy": ConversionProfile(
        name="energy",
        supported_uoms=frozenset({canon.WATT_HOURS}),
        energy_uoms=frozenset({canon.WATT_HOURS}),
        columns=ENERGY_COLS,
    ),
    # Both channels scaled to a single Wh-class unit, plus local time offsets
    "interval": ConversionProfile(
        name="interval",
        supported_uoms=frozenset({canon.WATTS, canon.WATT_HOURS}),
        energy_uoms=frozenset({canon.WATTS, canon.WATT_HOURS}),
        columns=INTERVAL_COLS,
    ),
}


def get_profile(name: str) -> ConversionProfile:
    profile = PROFILES.get(name)
    if profile is None:
        raise exceptions.ConfigError(
            f"Unknown profile {name!r}. Available profiles: {', '.join(sorted(PROFILES))}"
        )
    return profile


def default_profile() -> ConversionProfile:
    return PROFILES[canon.DEFAULT_PROFILE]


def resolve_profile(profile: Optional[ConversionProfile | str]) -> ConversionProfile:
    """Accept a profile, a profile name or None (default)."""
    if profile is None:
        return default_profile()
    if isinstance(profile, str):
        return get_profile(profile)
    exceptions.require(
        set(profile.columns).issubset(canon.ALL_COLS),
        f"Profile {profile.name!r} has unknown columns: "
        f"{sorted(set(profile.columns) - set(canon.ALL_COLS))}",
        exceptions.ConfigError,
    )
    exceptions.require(
        profile.energy_uoms.issubset(profile.supported_uoms),
        f"Profile {profile.name!r} derives energy for unsupported units.",
        exceptions.ConfigError,
    )
    return profile
