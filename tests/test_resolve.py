"""Tests for typed-link parsing and MeterReading -> ReadingType resolution."""

from lxml import etree

from conftest import MR_ID, RT_ID, feed, meter_reading_entry, reading_type_entry
from greenbuttonlogic import extract, ingest, resolve


def _resolved(data):
    entries = extract.feed_entries(ingest.read_feed(data))
    ents = extract.extract_entities(entries)
    return ents, resolve.resolve(ents, entries)


def test_typed_links_maps_kind_to_target():
    entry = etree.fromstring(
        "<entry>"
        '<link rel="self" href="https://x/MeterReading/urn:uuid:mr"/>'
        '<link rel="related" type="espi-entry/ReadingType" href="https://x/ReadingType/urn:uuid:rt"/>'
        '<link rel="related" type="espi-entry/ReadingType" href="https://x/ReadingType/urn:uuid:other"/>'
        '<link rel="up" type="espi-entry/MeterReading" href="https://x/MeterReading/urn:uuid:mr/IntervalBlock"/>'
        '<link rel="related" type="espi-entry/UsagePoint" href="https://x/NoMarkerHere"/>'
        "</entry>"
    )
    assert resolve.typed_links(entry) == {
        "ReadingType": "urn:uuid:rt",  # first link wins
        "MeterReading": "urn:uuid:mr",
    }


def test_resolves_meter_reading_to_reading_type(single_interval_feed):
    ents, resolved = _resolved(single_interval_feed)
    assert resolved.meter_readings[MR_ID].reading_type_id == RT_ID
    assert resolved.reading_type_for(MR_ID).uom == "38"
    # input left untouched
    assert ents.meter_readings[MR_ID].reading_type_id is None


def test_unresolvable_links_are_left_out():
    """No link, an untyped link, and a href without the marker all stay unresolved."""
    data = feed(
        reading_type_entry(),
        meter_reading_entry("urn:uuid:mr-nolink", rt_id=None),
        meter_reading_entry("urn:uuid:mr-untyped", link_type="related"),
        meter_reading_entry("urn:uuid:mr-ok"),
    )
    ents, resolved = _resolved(data)
    links = resolve.resolve_reading_types(ents, extract.feed_entries(ingest.read_feed(data)))
    assert links == {"urn:uuid:mr-ok": RT_ID}
    assert resolved.meter_readings["urn:uuid:mr-nolink"].reading_type_id is None
    assert resolved.reading_type_for("urn:uuid:mr-untyped") is None
    assert resolved.reading_type_for("urn:uuid:unknown") is None
    assert resolved.reading_type_for(None) is None


def test_link_to_missing_reading_type_does_not_resolve_record():
    ents, resolved = _resolved(feed(meter_reading_entry(rt_id="urn:uuid:ghost")))
    assert resolved.meter_readings[MR_ID].reading_type_id == "urn:uuid:ghost"
    assert resolved.reading_type_for(MR_ID) is None
