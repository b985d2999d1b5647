"""Tests for loading KiCad files through the record registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from kicad_sexp.models.errors import (
    InvalidFileFormatError,
    InvalidPathError,
    MissingFieldError,
    SchemaError,
    UnexpectedError,
)
from kicad_sexp.records import Color, Schematic, SymbolLibrary
from kicad_sexp.sexp.values import Symbol
from kicad_sexp.utils.sexp_parser import parse_expression, parse_kicad_file, read_sexp_file


class TestReadSexpFile:
    def test_reads_value(self, sample_schematic_path: Path):
        value = read_sexp_file(sample_schematic_path)
        assert value.head == Symbol("kicad_sch")

    def test_not_an_expression(self, tmp_path: Path):
        path = tmp_path / "notes.kicad_sch"
        path.write_text("EESchema Schematic File Version 4\n")
        with pytest.raises(InvalidFileFormatError, match="Not a valid S-expression"):
            read_sexp_file(path)

    def test_size_limit(self, sample_schematic_path: Path):
        with pytest.raises(InvalidFileFormatError):
            read_sexp_file(sample_schematic_path, max_size=10)

    def test_bad_extension(self, tmp_path: Path):
        path = tmp_path / "board.kicad_pcb"
        path.write_text("(kicad_pcb)")
        with pytest.raises(InvalidPathError):
            read_sexp_file(path)


class TestParseKicadFile:
    def test_schematic(self, sample_schematic_path: Path):
        assert isinstance(parse_kicad_file(sample_schematic_path), Schematic)

    def test_library(self, sample_library_path: Path):
        assert isinstance(parse_kicad_file(str(sample_library_path)), SymbolLibrary)

    def test_dispatches_on_head_not_extension(self, tmp_path: Path):
        path = tmp_path / "renamed.kicad_sch"
        path.write_text('(kicad_symbol_lib (version 1) (generator "t"))')
        assert isinstance(parse_kicad_file(path), SymbolLibrary)

    def test_unknown_head(self, tmp_path: Path):
        path = tmp_path / "odd.kicad_sch"
        path.write_text("(kicad_pcb (version 1))")
        with pytest.raises(InvalidFileFormatError) as exc_info:
            parse_kicad_file(path)
        assert exc_info.value.details["head"] == "kicad_pcb"

    def test_parse_error_propagates(self, tmp_path: Path):
        path = tmp_path / "broken.kicad_sch"
        path.write_text('(kicad_sch (generator "eeschema"))')
        with pytest.raises(MissingFieldError):
            parse_kicad_file(path)


class TestParseExpression:
    def test_by_name(self):
        color = parse_expression("(color 0.5 0.5 0.5 1)", "Color")
        assert color == Color(red=0.5, green=0.5, blue=0.5, alpha=1.0)

    def test_unknown_record(self):
        with pytest.raises(SchemaError):
            parse_expression("(color 0 0 0)", "Colour")

    def test_mismatch(self):
        with pytest.raises(UnexpectedError):
            parse_expression("(stroke (width 1) (bogus 2))", "Stroke")
