from . import (
    canon,
    types,
    utils,
    profiles,
    ingest,
    extract,
    resolve,
    flatten,
    formats,
    validate,
    summary,
    pipeline,
)
from .pipeline import convert, convert_to_csv

__all__ = [
    "canon",
    "types",
    "utils",
    "profiles",
    "ingest",
    "extract",
    "resolve",
    "flatten",
    "formats",
    "validate",
    "summary",
    "pipeline",
    "convert",
    "convert_to_csv",
]
