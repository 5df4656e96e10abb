from __future__ import annotations
from pathlib import Path
from typing import IO

from lxml import etree

from . import exceptions
from .logging_config import get_logger

log = get_logger(__name__)

_PARSER_OPTIONS = dict(remove_blank_text=True, resolve_entities=False, no_network=True)


def _strip_namespaces(root: etree._Element) -> etree._Element:
    """Rewrite every tag to its local name so lookups ignore prefixes."""
    for el in root.iter():
        if not isinstance(el.tag, str):
            # comments / processing instructions
            continue
        el.tag = etree.QName(el).localname
        for name in list(el.attrib):
            if name.startswith("{"):
                el.attrib[etree.QName(name).localname] = el.attrib.pop(name)
    etree.cleanup_namespaces(root)
    return root


def parse_feed_bytes(data: bytes) -> etree._Element:
    """
    Parse an in-memory ESPI feed and return its namespace-free root.

    Raises IngestError when the document is not well-formed XML.
    """
    parser = etree.XMLParser(**_PARSER_OPTIONS)
    try:
        root = etree.fromstring(data, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise exceptions.IngestError(f"Input is not well-formed XML: {e}") from e
    return _strip_namespaces(root)


def read_feed(source: str | Path | bytes | IO[bytes]) -> etree._Element:
    """
    Read a whole ESPI Atom feed and return its namespace-free root element.

    `source` may be a filesystem path, raw bytes or a binary file object.
    Any failure here is fatal for the run and raised as IngestError.
    """
    if isinstance(source, bytes):
        data = source
        label = "<bytes>"
    elif isinstance(source, (str, Path)):
        path = Path(source)
        label = str(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise exceptions.IngestError(f"Cannot read input file {path}: {e}") from e
    else:
        label = getattr(source, "name", "<stream>")
        try:
            data = source.read()
        except OSError as e:
            raise exceptions.IngestError(f"Cannot read input stream {label}: {e}") from e
        if isinstance(data, str):
            data = data.encode("utf-8")

    root = parse_feed_bytes(data)
    log.info("feed_parsed", source=str(label), bytes=len(data))
    return root
