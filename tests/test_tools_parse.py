"""Tests for the parsing tools."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from fastmcp import FastMCP

from kicad_sexp.models.errors import InvalidPathError, MissingFieldError
from kicad_sexp.sexp.values import Symbol, cons_list
from kicad_sexp.tools.parse import error_payload, register_tools
from kicad_sexp.utils.change_log import ChangeLog


@pytest.fixture
def mcp_parse(tmp_change_log: ChangeLog):
    mcp = FastMCP("test")
    register_tools(mcp, tmp_change_log, max_file_size=1024 * 1024)
    return mcp


def call(mcp: FastMCP, name: str, **kwargs) -> dict:
    return json.loads(mcp._tool_manager._tools[name].fn(**kwargs))


class TestParseKicadFile:
    def test_schematic(self, mcp_parse, sample_schematic_path: Path):
        result = call(mcp_parse, "parse_kicad_file", path=str(sample_schematic_path))
        assert result["status"] == "success"
        assert result["record_type"] == "Schematic"
        data = result["data"]
        assert data["uuid"] == "e63e39d7-6ac0-4ffd-8aa3-1841a4541b55"
        assert data["paper"]["size"] == "A4"
        assert data["global_labels"][0]["shape"] == "input"
        assert len(data["wires"]) == 2

    def test_library(self, mcp_parse, sample_library_path: Path):
        result = call(mcp_parse, "parse_kicad_file", path=str(sample_library_path))
        assert result["record_type"] == "SymbolLibrary"
        assert [s["id"] for s in result["data"]["symbols"]] == ["R", "LED"]

    def test_missing_file(self, mcp_parse, tmp_path: Path):
        result = call(mcp_parse, "parse_kicad_file", path=str(tmp_path / "gone.kicad_sch"))
        assert result["status"] == "error"
        assert result["error"]["kind"] == "InvalidPathError"

    def test_parse_failure(self, mcp_parse, tmp_path: Path):
        path = tmp_path / "broken.kicad_sch"
        path.write_text('(kicad_sch (version 1) (generator "t") (wire (pts)))')
        result = call(mcp_parse, "parse_kicad_file", path=str(path))
        assert result["status"] == "error"
        assert result["error"]["kind"] == "MissingField"
        assert result["error"]["details"] == {"record": "wire", "field": "stroke"}
        assert result["error"]["value"] == "(wire (pts))"

    def test_records_change_log(self, mcp_parse, tmp_change_log, sample_library_path: Path):
        call(mcp_parse, "parse_kicad_file", path=str(sample_library_path))
        call(mcp_parse, "parse_kicad_file", path="")
        entries = tmp_change_log.get_recent()
        assert [e["status"] for e in entries] == ["success", "error"]
        assert entries[0]["tool"] == "parse_kicad_file"
        assert entries[0]["record_type"] == "SymbolLibrary"


class TestParseExpression:
    def test_color(self, mcp_parse):
        result = call(mcp_parse, "parse_expression", text="(color 0.1 0.2 0.3 1)", record_type="Color")
        assert result["status"] == "success"
        assert result["data"] == {"red": 0.1, "green": 0.2, "blue": 0.3, "alpha": 1.0}

    def test_lengths_in_nanometers(self, mcp_parse):
        result = call(mcp_parse, "parse_expression", text="(at 2.54 -1.27 90)", record_type="Position")
        assert result["data"] == {"x": 2_540_000, "y": -1_270_000, "angle": 90.0}

    def test_non_finite_length(self, mcp_parse):
        result = call(mcp_parse, "parse_expression", text="(at nan 0)", record_type="Position")
        assert result["status"] == "error"
        assert result["error"]["kind"] == "ExpectedFloat"

    def test_unknown_record_type(self, mcp_parse):
        result = call(mcp_parse, "parse_expression", text="(color 0 0 0)", record_type="Nope")
        assert result["status"] == "error"
        assert result["error"]["kind"] == "SchemaError"

    def test_wrong_head(self, mcp_parse):
        result = call(mcp_parse, "parse_expression", text="(colour 0 0 0)", record_type="Color")
        assert result["error"]["kind"] == "ExpectedNamedSymbol"
        assert result["error"]["details"] == {"name": "color"}

    def test_reader_failure(self, mcp_parse):
        result = call(mcp_parse, "parse_expression", text="(color 0 0", record_type="Color")
        assert result["status"] == "error"


class TestListRecordTypes:
    def test_lists_records(self, mcp_parse):
        result = call(mcp_parse, "list_record_types")
        assert result["record_types"]["Schematic"] == "kicad_sch"
        assert result["record_types"]["Position"] == "at"
        assert result["file_heads"] == {
            "kicad_sch": "Schematic",
            "kicad_symbol_lib": "SymbolLibrary",
        }


class TestFormatRecord:
    def test_normalizes(self, mcp_parse):
        result = call(
            mcp_parse, "format_record",
            text="(stroke (type dash) (width 0.254))", record_type="Stroke",
        )
        assert result["status"] == "success"
        assert "(width 0.254)" in result["text"]
        assert result["text"].index("width") < result["text"].index("type")

    def test_error(self, mcp_parse):
        result = call(mcp_parse, "format_record", text="(stroke (width -))", record_type="Stroke")
        assert result["status"] == "error"


class TestErrorPayload:
    def test_parse_error(self):
        value = cons_list(Symbol("font"))
        payload = error_payload(MissingFieldError("font", "size", value))
        assert payload["kind"] == "MissingField"
        assert payload["value"] == "(font)"

    def test_other_error(self):
        payload = error_payload(InvalidPathError("File not found: x", {"path": Path("x")}))
        assert payload["kind"] == "InvalidPathError"
        assert payload["details"] == {"path": "x"}
