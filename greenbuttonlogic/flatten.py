from __future__ import annotations
from typing import List, Optional

from lxml import etree

from . import canon, utils
from .extract import content_of
from .logging_config import get_logger
from .resolve import linked_id
from .types import (
    ConversionProfile,
    FeedEntities,
    IntervalBlock,
    IntervalReading,
    IntervalRow,
    ReadingType,
)

log = get_logger(__name__)


def unit_name(uom: Optional[str]) -> str:
    if uom is None:
        return "uom:unknown"
    return canon.UOM_NAMES.get(uom, f"uom:{uom}")


def kind_name(kind: Optional[str]) -> Optional[str]:
    if kind is None:
        return None
    return canon.KIND_NAMES.get(kind, f"kind:{kind}")


def parse_interval_block(entry: etree._Element, ib: etree._Element) -> IntervalBlock:
    readings = tuple(
        IntervalReading(
            start=utils.int_or_none(ir, "./timePeriod/start"),
            duration=utils.int_or_none(ir, "./timePeriod/duration"),
            value=utils.int_or_none(ir, "./value"),
        )
        for ir in ib.findall("./IntervalReading")
    )
    return IntervalBlock(
        entry_id=utils.entry_id(entry),
        meter_reading_id=linked_id(entry, canon.METER_READING),
        interval_start=utils.int_or_none(ib, "./interval/start"),
        interval_duration=utils.int_or_none(ib, "./interval/duration"),
        readings=readings,
    )


def to_row(
    reading: IntervalReading,
    block: IntervalBlock,
    rt: ReadingType,
    entities: FeedEntities,
    profile: ConversionProfile,
) -> IntervalRow:
    """Denormalise one IntervalReading against its block and ReadingType."""
    scaled = utils.scale(reading.value, rt.power_of_ten_multiplier)

    value_wh = value_kwh = avg_kw = None
    if rt.uom in profile.energy_uoms and scaled is not None:
        value_wh = scaled
        value_kwh = value_wh / canon.WH_PER_KWH
        if reading.duration is not None and reading.duration > 0:
            avg_kw = value_kwh * canon.SECONDS_PER_HOUR / reading.duration

    ltp = entities.local_time
    return IntervalRow(
        start=reading.start,
        end=reading.end,
        duration=reading.duration,
        value=reading.value,
        power_of_ten_multiplier=rt.power_of_ten_multiplier,
        scaled_value=scaled,
        uom=rt.uom,
        unit=unit_name(rt.uom),
        kind=kind_name(rt.kind),
        value_wh=value_wh,
        value_kwh=value_kwh,
        avg_kw=avg_kw,
        block_start=block.interval_start,
        block_duration=block.interval_duration,
        tz_offset=ltp.tz_offset if ltp else None,
        dst_offset=ltp.dst_offset if ltp else None,
        meter_reading_id=block.meter_reading_id,
        reading_type_id=rt.id,
    )


def flatten(
    entries: List[etree._Element],
    entities: FeedEntities,
    profile: ConversionProfile,
) -> List[IntervalRow]:
    """
    Emit one IntervalRow per IntervalReading, in document order.

    Blocks are skipped (never raised on) when their MeterReading link is
    missing, the MeterReading -> ReadingType chain does not resolve, or the
    ReadingType's unit is not in `profile.supported_uoms`.
    """
    rows: List[IntervalRow] = []
    blocks = skipped = 0

    for entry in entries:
        ib = content_of(entry, canon.INTERVAL_BLOCK)
        if ib is None:
            continue
        blocks += 1

        mr_id = linked_id(entry, canon.METER_READING)
        rt = entities.reading_type_for(mr_id)
        if rt is None:
            skipped += 1
            log.debug("interval_block_unresolved", entry_id=utils.entry_id(entry), meter_reading_id=mr_id)
            continue
        if rt.uom not in profile.supported_uoms:
            skipped += 1
            log.debug("interval_block_unsupported_uom", entry_id=utils.entry_id(entry), uom=rt.uom)
            continue

        block = parse_interval_block(entry, ib)
        rows.extend(to_row(r, block, rt, entities, profile) for r in block.readings)

    log.debug("intervals_flattened", blocks=blocks, skipped=skipped, rows=len(rows))
    return rows
