import pytest

from greenbuttonlogic import logging_config

BASE = "https://utility.example.com/DataCustodian/espi/1_1/resource"
SUB = f"{BASE}/Subscription/5/UsagePoint/1"

RT_ID = "urn:uuid:aaaaaaaa-0000-0000-0000-000000000001"
MR_ID = "urn:uuid:bbbbbbbb-0000-0000-0000-000000000001"


def feed(*entries: str) -> bytes:
    body = "\n".join(entries)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<feed xmlns="http://www.w3.org/2005/Atom" xmlns:espi="http://naesb.org/espi">\n'
        "  <id>urn:uuid:feed</id>\n"
        "  <title>Green Button Usage Feed</title>\n"
        f"{body}\n"
        "</feed>\n"
    ).encode("utf-8")


def reading_type_entry(rt_id=RT_ID, uom="38", power="0", kind="12", extra=""):
    power_xml = "" if power is None else f"<espi:powerOfTenMultiplier>{power}</espi:powerOfTenMultiplier>"
    kind_xml = "" if kind is None else f"<espi:kind>{kind}</espi:kind>"
    return f"""
      <entry>
        <id>{rt_id}</id>
        <link rel="self" href="{BASE}/ReadingType/{rt_id}"/>
        <content>
          <espi:ReadingType>
            <espi:accumulationBehaviour>4</espi:accumulationBehaviour>
            <espi:commodity>1</espi:commodity>
            <espi:flowDirection>1</espi:flowDirection>
            <espi:intervalLength>900</espi:intervalLength>
            {kind_xml}
            {power_xml}
            <espi:uom>{uom}</espi:uom>
            {extra}
          </espi:ReadingType>
        </content>
      </entry>"""


def meter_reading_entry(mr_id=MR_ID, rt_id=RT_ID, link_type="espi-entry/ReadingType"):
    link = (
        ""
        if rt_id is None
        else f'<link rel="related" type="{link_type}" href="{BASE}/ReadingType/{rt_id}"/>'
    )
    return f"""
      <entry>
        <id>{mr_id}</id>
        <link rel="self" href="{SUB}/MeterReading/{mr_id}"/>
        <link rel="related" href="{SUB}/MeterReading/{mr_id}/IntervalBlock"/>
        {link}
        <content>
          <espi:MeterReading/>
        </content>
      </entry>"""


def interval_reading(start, duration, value):
    parts = []
    if start is not None:
        parts.append(f"<espi:start>{start}</espi:start>")
    if duration is not None:
        parts.append(f"<espi:duration>{duration}</espi:duration>")
    value_xml = "" if value is None else f"<espi:value>{value}</espi:value>"
    return f"""
            <espi:IntervalReading>
              <espi:timePeriod>{''.join(parts)}</espi:timePeriod>
              {value_xml}
            </espi:IntervalReading>"""


def interval_block_entry(readings, mr_id=MR_ID, start=1000, duration=900, block_id="urn:uuid:block-1", mr_href=None):
    href = mr_href if mr_href is not None else f"{SUB}/MeterReading/{mr_id}/IntervalBlock/1"
    link = "" if mr_id is None and mr_href is None else (
        f'<link rel="up" type="espi-entry/MeterReading" href="{href}"/>'
    )
    return f"""
      <entry>
        <id>{block_id}</id>
        {link}
        <content>
          <espi:IntervalBlock>
            <espi:interval>
              <espi:duration>{duration}</espi:duration>
              <espi:start>{start}</espi:start>
            </espi:interval>
            {''.join(readings)}
          </espi:IntervalBlock>
        </content>
      </entry>"""


def local_time_entry(tz_offset=-18000, dst_offset=3600):
    return f"""
      <entry>
        <id>urn:uuid:ltp-1</id>
        <content>
          <LocalTimeParameters xmlns="http://naesb.org/espi">
            <dstEndRule>B40E2000</dstEndRule>
            <dstOffset>{dst_offset}</dstOffset>
            <dstStartRule>360E2000</dstStartRule>
            <tzOffset>{tz_offset}</tzOffset>
          </LocalTimeParameters>
        </content>
      </entry>"""


def usage_point_entry():
    return """
      <entry>
        <id>urn:uuid:usage-point-1</id>
        <content>
          <espi:UsagePoint>
            <espi:ServiceCategory><espi:kind>0</espi:kind></espi:ServiceCategory>
          </espi:UsagePoint>
        </content>
      </entry>"""


@pytest.fixture
def single_interval_feed():
    """One ReadingType (uom 38), one MeterReading, one block with one reading."""
    return feed(
        usage_point_entry(),
        reading_type_entry(),
        meter_reading_entry(),
        interval_block_entry([interval_reading(1000, 900, 500)]),
    )


@pytest.fixture
def mixed_feed():
    """
    Three channels:
      - Wh (72), multiplier -1, two blocks of 2 readings each
      - W (38), multiplier 0, one block of 3 readings
      - therms (169), one block of 2 readings (never supported)
    plus LocalTimeParameters and a UsagePoint.
    """
    wh_rt, w_rt, th_rt = "urn:uuid:rt-wh", "urn:uuid:rt-w", "urn:uuid:rt-therm"
    wh_mr, w_mr, th_mr = "urn:uuid:mr-wh", "urn:uuid:mr-w", "urn:uuid:mr-therm"
    return feed(
        local_time_entry(),
        usage_point_entry(),
        reading_type_entry(wh_rt, uom="72", power="-1", kind="12"),
        reading_type_entry(w_rt, uom="38", power="0", kind="8"),
        reading_type_entry(th_rt, uom="169", power="0", kind="12"),
        meter_reading_entry(wh_mr, wh_rt),
        meter_reading_entry(w_mr, w_rt),
        meter_reading_entry(th_mr, th_rt),
        interval_block_entry(
            [interval_reading(0, 3600, 12345), interval_reading(3600, 3600, 0)],
            mr_id=wh_mr, start=0, duration=7200, block_id="urn:uuid:b1",
        ),
        interval_block_entry(
            [interval_reading(7200, 3600, 20), interval_reading(10800, 0, 40)],
            mr_id=wh_mr, start=7200, duration=7200, block_id="urn:uuid:b2",
        ),
        interval_block_entry(
            [interval_reading(0, 900, 1500), interval_reading(900, 900, 1600), interval_reading(1800, 900, 1700)],
            mr_id=w_mr, start=0, duration=2700, block_id="urn:uuid:b3",
        ),
        interval_block_entry(
            [interval_reading(0, 86400, 3), interval_reading(86400, 86400, 4)],
            mr_id=th_mr, start=0, duration=172800, block_id="urn:uuid:b4",
        ),
    )


@pytest.fixture
def feed_path(tmp_path, single_interval_feed):
    p = tmp_path / "usage.xml"
    p.write_bytes(single_interval_feed)
    return p


@pytest.fixture(autouse=True)
def _reset_logging():
    """Restore the quiet defaults after tests that pass --log-level."""
    yield
    logging_config.configure_logging()
