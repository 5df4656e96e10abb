from __future__ import annotations
from typing import List, Optional

from lxml import etree

from . import canon, utils
from .logging_config import get_logger
from .types import FeedEntities, LocalTimeParameters, MeterReading, ReadingType

log = get_logger(__name__)


def feed_entries(root: etree._Element) -> List[etree._Element]:
    """All Atom entries in document order (the root itself may be an entry)."""
    return list(root.iter("entry"))


def content_of(entry: etree._Element, kind: str) -> Optional[etree._Element]:
    return entry.find(f"./content/{kind}")


def _power_of_ten(rt: etree._Element) -> Optional[int]:
    text = utils.text_or_none(rt, "./powerOfTenMultiplier")
    return utils.parse_int(text if text is not None else canon.DEFAULT_POWER_OF_TEN)


def parse_reading_type(entry_id: str, rt: etree._Element) -> ReadingType:
    return ReadingType(
        id=entry_id,
        uom=utils.text_or_none(rt, "./uom"),
        power_of_ten_multiplier=_power_of_ten(rt),
        kind=utils.text_or_none(rt, "./kind"),
        interval_length=utils.int_or_none(rt, "./intervalLength"),
        accumulation_behaviour=utils.text_or_none(rt, "./accumulationBehaviour"),
        commodity=utils.text_or_none(rt, "./commodity"),
        flow_direction=utils.text_or_none(rt, "./flowDirection"),
    )


def parse_local_time(ltp: etree._Element) -> LocalTimeParameters:
    return LocalTimeParameters(
        tz_offset=utils.int_or_none(ltp, "./tzOffset"),
        dst_offset=utils.int_or_none(ltp, "./dstOffset"),
    )


def extract_entities(entries: List[etree._Element]) -> FeedEntities:
    """
    Single pass over feed entries collecting ReadingTypes and MeterReadings
    keyed by entry id, plus the first LocalTimeParameters seen.

    Entries without an id, and entries of any other kind, are ignored.
    The MeterReading -> ReadingType link is left unresolved here.
    """
    out = FeedEntities()

    for entry in entries:
        ltp = content_of(entry, canon.LOCAL_TIME_PARAMETERS)
        if ltp is not None and out.local_time is None:
            out.local_time = parse_local_time(ltp)

        eid = utils.entry_id(entry)
        if eid is None:
            continue

        rt = content_of(entry, canon.READING_TYPE)
        if rt is not None:
            out.reading_types[eid] = parse_reading_type(eid, rt)
            continue

        if content_of(entry, canon.METER_READING) is not None:
            out.meter_readings[eid] = MeterReading(id=eid)

    log.debug(
        "entities_extracted",
        reading_types=len(out.reading_types),
        meter_readings=len(out.meter_readings),
        local_time=out.local_time is not None,
    )
    return out
