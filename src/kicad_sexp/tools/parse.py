"""Parsing tools - 4 tools."""

from __future__ import annotations

import json
from typing import Any

from fastmcp import FastMCP

from kicad_sexp.logging_config import get_logger
from kicad_sexp.models.errors import KiCadSexpError, ParseError
from kicad_sexp.schema import registry
from kicad_sexp.utils import sexp_parser
from kicad_sexp.utils.change_log import ChangeLog

logger = get_logger("tools.parse")


def error_payload(error: KiCadSexpError) -> dict[str, Any]:
    """Structured description of a failure for tool responses."""
    if isinstance(error, ParseError):
        return error.to_dict()
    return {
        "kind": type(error).__name__,
        "message": str(error),
        "details": {key: _jsonable(value) for key, value in error.details.items()},
    }


def _jsonable(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return str(value)


def _error_response(tool: str, params: dict[str, Any], error: KiCadSexpError, change_log: ChangeLog) -> str:
    logger.warning("%s failed: %s", tool, error)
    change_log.record(tool, params, result_status="error", error=str(error))
    return json.dumps({
        "status": "error",
        "message": str(error),
        "error": error_payload(error),
    }, indent=2)


def register_tools(mcp: FastMCP, change_log: ChangeLog, max_file_size: int) -> None:
    """Register parsing tools on the MCP server."""

    @mcp.tool()
    def parse_kicad_file(path: str) -> str:
        """Parse a KiCad schematic or symbol library into typed JSON.

        Lengths are reported in nanometers.

        Args:
            path: Path to a .kicad_sch or .kicad_sym file.

        Returns:
            JSON with the record type and its fields.
        """
        params = {"path": path}
        try:
            record = sexp_parser.parse_kicad_file(path, max_file_size)
        except KiCadSexpError as e:
            return _error_response("parse_kicad_file", params, e, change_log)
        change_log.record("parse_kicad_file", params, record_type=type(record).__name__)
        return json.dumps({
            "status": "success",
            "record_type": type(record).__name__,
            "data": record.model_dump(mode="json"),
        }, indent=2)

    @mcp.tool()
    def parse_expression(text: str, record_type: str) -> str:
        """Parse one s-expression against a named record type.

        Args:
            text: The expression, e.g. '(color 0.1 0.2 0.3 1)'.
            record_type: Record name from list_record_types, e.g. 'Color'.

        Returns:
            JSON with the parsed fields, or the exact failure kind and the
            offending sub-expression.
        """
        params = {"text": text, "record_type": record_type}
        try:
            record = sexp_parser.parse_expression(text, record_type)
        except KiCadSexpError as e:
            return _error_response("parse_expression", params, e, change_log)
        change_log.record("parse_expression", params, record_type=record_type)
        return json.dumps({
            "status": "success",
            "record_type": record_type,
            "data": record.model_dump(mode="json"),
        }, indent=2)

    @mcp.tool()
    def list_record_types() -> str:
        """List every record type and the KiCad file heads that can be loaded.

        Returns:
            JSON with record names, their head symbols, and file types.
        """
        record_types = {
            name: registry.lookup(name).sexp_schema.head
            for name in registry.record_names()
        }
        change_log.record("list_record_types", {})
        return json.dumps({
            "status": "success",
            "record_types": record_types,
            "file_heads": {
                head: registry.for_file_head(head).__name__
                for head in registry.file_heads()
            },
        }, indent=2)

    @mcp.tool()
    def format_record(text: str, record_type: str) -> str:
        """Parse an expression and write it back in KiCad's layout.

        Lengths pass through nanometers, so values finer than 1 nm are
        truncated.

        Args:
            text: The expression to normalize.
            record_type: Record name from list_record_types.

        Returns:
            JSON with the normalized text.
        """
        params = {"text": text, "record_type": record_type}
        try:
            record = sexp_parser.parse_expression(text, record_type)
        except KiCadSexpError as e:
            return _error_response("format_record", params, e, change_log)
        change_log.record("format_record", params, record_type=record_type)
        return json.dumps({
            "status": "success",
            "record_type": record_type,
            "text": record.to_text(),
        }, indent=2)
