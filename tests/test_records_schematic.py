"""Tests for schematic records, using the sample schematic file."""

from __future__ import annotations

from uuid import UUID

import pytest

from kicad_sexp.models.errors import (
    DuplicateFieldError,
    InvalidIdentifierError,
    MissingFieldError,
    UnexpectedError,
)
from kicad_sexp.records.common import HorizJustify, LineStyle, PaperSize, VertJustify
from kicad_sexp.records.schematic import (
    BusEntrySize,
    GlobalLabel,
    Junction,
    Label,
    LabelShape,
    Schematic,
    Wire,
)
from kicad_sexp.utils.sexp_parser import parse_kicad_file

UUID_TEXT = "0b6a4c7e-1d2f-4a3b-9c8d-7e6f5a4b3c2d"


@pytest.fixture
def schematic(sample_schematic_path) -> Schematic:
    return parse_kicad_file(sample_schematic_path)


class TestItems:
    def test_bus_entry_size_may_be_negative(self):
        size = BusEntrySize.from_text("(size 2.54 -2.54)")
        assert (size.x, size.y) == (2_540_000, -2_540_000)

    def test_wire(self):
        wire = Wire.from_text(
            f'(wire (pts (xy 0 0) (xy 2.54 0)) (stroke (width 0) (type default)) (uuid "{UUID_TEXT}"))'
        )
        assert [p.x for p in wire.points.points] == [0, 2_540_000]
        assert wire.stroke.line_style is LineStyle.DEFAULT
        assert wire.uuid == UUID(UUID_TEXT)

    def test_bad_uuid(self):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            Junction.from_text(
                '(junction (at 0 0) (diameter 0) (color 0 0 0 0) (uuid "not-a-uuid"))'
            )
        assert exc_info.value.text == "not-a-uuid"

    def test_junction_needs_uuid(self):
        with pytest.raises(MissingFieldError) as exc_info:
            Junction.from_text("(junction (at 0 0) (diameter 0) (color 0 0 0 0))")
        assert exc_info.value.field == "uuid"

    def test_label_autoplaced_forms(self):
        base = f'(label "A" (at 0 0) (effects) (uuid "{UUID_TEXT}")'
        assert Label.from_text(base + ")").fields_autoplaced is False
        assert Label.from_text(base + " fields_autoplaced)").fields_autoplaced is True
        assert Label.from_text(base + " (fields_autoplaced yes))").fields_autoplaced is True

    def test_label_autoplaced_twice(self):
        with pytest.raises(DuplicateFieldError):
            Label.from_text(
                f'(label "A" (at 0 0) fields_autoplaced (fields_autoplaced yes) (effects) (uuid "{UUID_TEXT}"))'
            )

    def test_global_label_shape(self):
        label = GlobalLabel.from_text(
            f'(global_label "CLK" (shape bidirectional) (at 0 0) (effects) (uuid "{UUID_TEXT}"))'
        )
        assert label.shape is LabelShape.BIDIRECTIONAL
        assert label.properties == ()


class TestSampleSchematic:
    def test_header(self, schematic):
        assert isinstance(schematic, Schematic)
        assert schematic.version == 20231120
        assert schematic.generator == "eeschema"
        assert schematic.generator_version == "8.0"
        assert schematic.uuid == UUID("e63e39d7-6ac0-4ffd-8aa3-1841a4541b55")
        assert schematic.paper.size is PaperSize.A4

    def test_title_block(self, schematic):
        block = schematic.title_block
        assert block.title == "Sensor Board"
        assert block.date == "2024-01-15"
        assert block.company == "Acme Electronics"
        assert block.comment(2) == "Second pass"

    def test_lib_symbols(self, schematic):
        resistor = schematic.find_lib_symbol("Device:R")
        assert resistor is not None
        assert resistor.get_property("Reference") == "R"
        assert len(resistor.all_pins()) == 1
        assert schematic.find_lib_symbol("Device:C") is None

    def test_item_counts(self, schematic):
        assert len(schematic.junctions) == 1
        assert len(schematic.no_connects) == 1
        assert len(schematic.bus_entries) == 1
        assert len(schematic.wires) == 2
        assert len(schematic.buses) == 1
        assert len(schematic.polylines) == 1
        assert len(schematic.texts) == 1
        assert len(schematic.labels) == 1
        assert len(schematic.global_labels) == 1

    def test_items(self, schematic):
        assert schematic.junctions[0].uuid == UUID(UUID_TEXT)
        assert schematic.junctions[0].color.alpha == 0.0
        assert schematic.bus_entries[0].size.y == -2_540_000
        assert schematic.polylines[0].stroke.line_style is LineStyle.DASH
        assert len(schematic.polylines[0].points.points) == 3

        text = schematic.texts[0]
        assert text.text == "Power input"
        assert text.exclude_from_sim is False
        assert text.effects.justify.horizontal is HorizJustify.LEFT
        assert text.effects.justify.vertical is VertJustify.BOTTOM

        label = schematic.labels[0]
        assert label.text == "SDA"
        assert label.fields_autoplaced is True
        assert label.position.angle == 90.0

        vcc = schematic.global_labels[0]
        assert vcc.shape is LabelShape.INPUT
        assert vcc.properties[0].key == "Intersheetrefs"
        assert vcc.properties[0].effects.hide is True
        assert vcc.properties[0].effects.justify.vertical is None

    def test_minimal(self):
        schematic = Schematic.from_text('(kicad_sch (version 20231120) (generator "eeschema"))')
        assert schematic.paper is None
        assert schematic.lib_symbols == ()
        assert schematic.wires == ()

    def test_missing_version(self):
        with pytest.raises(MissingFieldError) as exc_info:
            Schematic.from_text('(kicad_sch (generator "eeschema"))')
        assert (exc_info.value.record, exc_info.value.field) == ("kicad_sch", "version")

    def test_symbol_instances_rejected(self):
        with pytest.raises(UnexpectedError):
            Schematic.from_text(
                '(kicad_sch (version 1) (generator "t") (symbol (lib_id "Device:R") (at 0 0 0)))'
            )
