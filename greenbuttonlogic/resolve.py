from __future__ import annotations
from typing import Dict, List, Optional

from lxml import etree

from . import canon, utils
from .extract import content_of
from .logging_config import get_logger
from .types import FeedEntities

log = get_logger(__name__)


def typed_links(entry: etree._Element) -> Dict[str, str]:
    """
    Map declared link kind -> target entity id for one entry.

    Only links typed ``espi-entry/<Kind>`` whose href carries a ``<Kind>/<id>``
    segment pair are kept; the first such link per kind wins.
    """
    out: Dict[str, str] = {}
    for link in entry.findall("./link"):
        kind = utils.link_kind(link.get("type"))
        if kind is None or kind in out:
            continue
        target = utils.link_target_id(link.get("href"), kind)
        if target is not None:
            out[kind] = target
    return out


def linked_id(entry: etree._Element, kind: str) -> Optional[str]:
    return typed_links(entry).get(kind)


def resolve_reading_types(
    entities: FeedEntities, entries: List[etree._Element]
) -> Dict[str, str]:
    """MeterReading id -> ReadingType id, for MeterReadings with a usable link."""
    out: Dict[str, str] = {}
    for entry in entries:
        if content_of(entry, canon.METER_READING) is None:
            continue
        mr_id = utils.entry_id(entry)
        if mr_id is None or mr_id not in entities.meter_readings:
            continue
        rt_id = linked_id(entry, canon.READING_TYPE)
        if rt_id is None:
            log.debug("meter_reading_unlinked", meter_reading_id=mr_id)
            continue
        out[mr_id] = rt_id
    return out


def resolve(entities: FeedEntities, entries: List[etree._Element]) -> FeedEntities:
    """Return a copy of `entities` whose MeterReadings carry reading_type_id."""
    links = resolve_reading_types(entities, entries)
    meter_readings = {
        mr_id: mr.model_copy(update={"reading_type_id": links.get(mr_id)})
        for mr_id, mr in entities.meter_readings.items()
    }
    return FeedEntities(
        reading_types=dict(entities.reading_types),
        meter_readings=meter_readings,
        local_time=entities.local_time,
    )
