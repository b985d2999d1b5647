"""Load KiCad s-expression files into typed records."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from kicad_sexp import records  # noqa: F401  registers every record type
from kicad_sexp.logging_config import get_logger
from kicad_sexp.models.errors import InvalidFileFormatError, ParseError
from kicad_sexp.schema import registry
from kicad_sexp.sexp.reader import read_sexp
from kicad_sexp.sexp.values import head_symbol
from kicad_sexp.utils.validation import validate_file_size, validate_kicad_path

logger = get_logger("sexp_parser")

DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024


def read_sexp_file(path: str | Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> Any:
    """Read a KiCad file into an s-expression value.

    Args:
        path: Path to a .kicad_sch or .kicad_sym file.
        max_size: Largest accepted file size in bytes.

    Raises:
        InvalidPathError: If the path is missing or has the wrong extension.
        InvalidFileFormatError: If the file is too large, unreadable, or not
            a single s-expression.
    """
    p = validate_kicad_path(path)
    size = validate_file_size(p, max_size)
    logger.debug("Reading %s (%d bytes)", p, size)

    try:
        content = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidFileFormatError(f"Cannot read file: {e}", {"path": str(p)}) from e

    if not content.lstrip().startswith("("):
        raise InvalidFileFormatError(f"Not a valid S-expression file: {p}", {"path": str(p)})

    return read_sexp(content)


def parse_kicad_file(path: str | Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> Any:
    """Parse a schematic or symbol library file into its record.

    The record type is chosen by the file's top-level head symbol
    (``kicad_sch`` or ``kicad_symbol_lib``).

    Raises:
        InvalidFileFormatError: If the head symbol is not a known file type.
        ParseError: If the content does not match the record's schema.
    """
    value = read_sexp_file(path, max_size)
    head = head_symbol(value)
    record_type = registry.for_file_head(head) if head is not None else None
    if record_type is None:
        raise InvalidFileFormatError(
            f"Unsupported KiCad file type '{head}' in {path}",
            {"path": str(path), "head": head, "supported": registry.file_heads()},
        )

    try:
        record = record_type.try_parse(value)
    except ParseError as e:
        logger.warning("Failed to parse %s as %s: %s", path, record_type.__name__, e)
        raise
    logger.info("Parsed %s as %s", path, record_type.__name__)
    return record


def parse_expression(text: str, record_name: str) -> Any:
    """Parse a single expression against the record registered as ``record_name``.

    Raises:
        SchemaError: If no record of that name exists.
        ParseError: If the expression does not match.
    """
    record_type = registry.lookup(record_name)
    return record_type.from_text(text)
