"""Tests for the shared KiCad records."""

from __future__ import annotations

import pytest

from kicad_sexp.models.errors import (
    ExpectedListError,
    InvalidEnumSymbolError,
    MissingFieldError,
    UnexpectedError,
)
from kicad_sexp.records.common import (
    Fill,
    FillType,
    Font,
    LineStyle,
    Offset,
    Paper,
    PaperSize,
    Property,
    Size,
    Stroke,
    TextEffects,
    TitleBlock,
)


class TestSize:
    def test_height_first(self):
        size = Size.from_text("(size 1.27 2.54)")
        assert size.height == 1_270_000
        assert size.width == 2_540_000

    def test_zero_allowed(self):
        assert Size.from_text("(size 0 0)").height == 0


class TestOffset:
    def test_signed(self):
        offset = Offset.from_text("(offset -1.27 2.54)")
        assert (offset.x, offset.y) == (-1_270_000, 2_540_000)


class TestFont:
    def test_minimal(self):
        font = Font.from_text("(font (size 1.27 1.27))")
        assert font.size.height == 1_270_000
        assert font.bold is False
        assert font.face is None

    def test_full(self):
        font = Font.from_text(
            '(font (face "Arial") (size 1 1) (thickness 0.254) bold italic (line_spacing 1.5)'
            " (color 255 0 0 1))"
        )
        assert font.face == "Arial"
        assert font.thickness == 254_000
        assert font.bold and font.italic
        assert font.line_spacing == 1.5
        assert font.color.red == 255.0

    def test_size_required(self):
        with pytest.raises(MissingFieldError) as exc_info:
            Font.from_text("(font bold)")
        assert (exc_info.value.record, exc_info.value.field) == ("font", "size")


class TestStrokeAndFill:
    def test_stroke(self):
        stroke = Stroke.from_text("(stroke (width 0.254) (type dash_dot_dot))")
        assert stroke.width == 254_000
        assert stroke.line_style is LineStyle.DASH_DOT_DOT

    def test_bad_line_style(self):
        with pytest.raises(InvalidEnumSymbolError):
            Stroke.from_text("(stroke (type zigzag))")

    def test_fill(self):
        assert Fill.from_text("(fill (type background))").fill_type is FillType.BACKGROUND
        assert Fill.from_text("(fill)").fill_type is None


class TestTextEffects:
    def test_effects(self):
        effects = TextEffects.from_text("(effects (font (size 1.27 1.27)) (justify right top mirror))")
        assert effects.justify.mirror is True
        assert effects.hide is False


class TestProperty:
    def test_property(self):
        prop = Property.from_text(
            '(property "Reference" "R1" (id 0) (at 100 48 0) (effects (font (size 1.27 1.27))))'
        )
        assert prop.key == "Reference"
        assert prop.value == "R1"
        assert prop.identifier == 0
        assert prop.position.x == 100_000_000

    def test_keyed_part_any_order(self):
        a = Property.from_text('(property "Value" "10k" (at 1 2) (id 1))')
        b = Property.from_text('(property "Value" "10k" (id 1) (at 1 2))')
        assert a == b

    def test_value_required(self):
        with pytest.raises(ExpectedListError):
            Property.from_text('(property "Value")')


class TestPaper:
    def test_standard(self):
        paper = Paper.from_text('(paper "A4")')
        assert paper.size is PaperSize.A4
        assert paper.height is None
        assert not paper.is_portrait

    def test_symbol_form_and_portrait(self):
        paper = Paper.from_text("(paper USLetter portrait)")
        assert paper.size is PaperSize.US_LETTER
        assert paper.is_portrait

    def test_user_size(self):
        paper = Paper.from_text('(paper "User" 100 200)')
        assert paper.size is PaperSize.USER
        assert (paper.height, paper.width) == (100_000_000, 200_000_000)

    def test_user_without_dimensions(self):
        with pytest.raises(MissingFieldError) as exc_info:
            Paper.from_text('(paper "User")')
        assert exc_info.value.field == "height"

    def test_user_missing_width(self):
        with pytest.raises(MissingFieldError) as exc_info:
            Paper.from_text('(paper "User" 100)')
        assert exc_info.value.field == "width"

    def test_standard_with_dimensions(self):
        with pytest.raises(UnexpectedError):
            Paper.from_text('(paper "A4" 100 200)')

    def test_unknown_size(self):
        with pytest.raises(InvalidEnumSymbolError) as exc_info:
            Paper.from_text('(paper "A9")')
        assert "A4" in exc_info.value.expected


class TestTitleBlock:
    def test_fields_and_comments(self):
        block = TitleBlock.from_text(
            '(title_block (title "Board") (date "2024-01-15") (rev "B") (company "Acme")'
            ' (comment 1 "first") (comment 4 "fourth"))'
        )
        assert block.title == "Board"
        assert block.rev == "B"
        assert block.comment(1) == "first"
        assert block.comment(4) == "fourth"
        assert block.comment(2) is None

    def test_empty(self):
        block = TitleBlock.from_text("(title_block)")
        assert block.title is None
        assert block.comments == ()
