"""Registry of record types.

Records register themselves when their class is created. The registry lets
schemas refer to records that are not defined yet (a library symbol holds
nested unit symbols of its own type) and lets file loaders pick the record
for a top-level head symbol. It is filled at import time and only read
afterwards.
"""

from __future__ import annotations

from typing import Any

from kicad_sexp.logging_config import get_logger
from kicad_sexp.models.errors import SchemaError

logger = get_logger("schema.registry")

_RECORDS: dict[str, type] = {}
_FILE_RECORDS: dict[str, type] = {}


def register(record_type: type, file_head: str | None = None) -> None:
    """Register a record class under its class name.

    Args:
        record_type: The record class.
        file_head: Head symbol of a whole KiCad file parsed by this record,
            e.g. ``"kicad_sch"``.
    """
    name = record_type.__name__
    existing = _RECORDS.get(name)
    if existing is not None and existing is not record_type:
        raise SchemaError(
            f"Record name '{name}' is already registered by {existing.__module__}",
            {"record": name},
        )
    _RECORDS[name] = record_type
    if file_head is not None:
        _FILE_RECORDS[file_head] = record_type
    logger.debug("Registered record %s", name)


def lookup(name: str) -> Any:
    """Return the record class registered as ``name``.

    Raises:
        SchemaError: If no record of that name exists.
    """
    try:
        return _RECORDS[name]
    except KeyError:
        raise SchemaError(f"Unknown record type '{name}'", {"record": name}) from None


def for_file_head(head: str) -> type | None:
    """Return the record class that parses files starting with ``head``."""
    return _FILE_RECORDS.get(head)


def record_names() -> list[str]:
    return sorted(_RECORDS)


def file_heads() -> list[str]:
    return sorted(_FILE_RECORDS)
