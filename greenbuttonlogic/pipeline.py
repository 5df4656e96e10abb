from __future__ import annotations
from pathlib import Path
from typing import IO, List, Optional

from . import formats
from .extract import extract_entities, feed_entries
from .flatten import flatten
from .ingest import read_feed
from .logging_config import get_logger
from .profiles import resolve_profile
from .resolve import resolve
from .types import ConversionProfile, IntervalRow

log = get_logger(__name__)

Source = str | Path | bytes | IO[bytes]


def convert(
    source: Source,
    profile: Optional[ConversionProfile | str] = None,
) -> List[IntervalRow]:
    """
    Run the whole feed -> rows transformation.

    Parse (fatal on bad input), extract ReadingTypes/MeterReadings, resolve
    MeterReading -> ReadingType links, then flatten IntervalBlocks into rows.
    """
    prof = resolve_profile(profile)
    root = read_feed(source)
    entries = feed_entries(root)
    entities = resolve(extract_entities(entries), entries)
    rows = flatten(entries, entities, prof)
    log.info("conversion_complete", profile=prof.name, entries=len(entries), rows=len(rows))
    return rows


def convert_to_csv(
    source: Source,
    output: Optional[str | Path] = None,
    profile: Optional[ConversionProfile | str] = None,
) -> tuple[int, Optional[str]]:
    """
    Convert and serialise in one go.

    Writes to `output` when given and returns (row_count, None); otherwise
    returns (row_count, csv_text).
    """
    prof = resolve_profile(profile)
    rows = convert(source, prof)
    if output is None:
        return len(rows), formats.to_csv_text(rows, prof)
    formats.write_csv(rows, output, prof)
    log.info("rows_written", path=str(output), rows=len(rows))
    return len(rows), None
