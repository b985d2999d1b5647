"""Records shared by KiCad schematic and symbol library files.

Lengths are stored in integer nanometers, the way KiCad holds them
internally; files write them as millimeters.
"""

from __future__ import annotations

from typing import Any, Optional

from kicad_sexp.models.errors import MissingFieldError, UnexpectedError
from kicad_sexp.schema.coerce import SexpEnum
from kicad_sexp.schema.record import SexpRecord
from kicad_sexp.schema.shapes import flag, headed, keyed, leaf, optional, positional, repeated
from kicad_sexp.utils.units import Unit


class Color(SexpRecord):
    """RGB color with optional alpha: ``(color r g b [a])``."""

    sexp_schema = positional(
        "color",
        leaf("red", float),
        leaf("green", float),
        leaf("blue", float),
        optional(leaf("alpha", float)),
    )

    red: float
    green: float
    blue: float
    alpha: Optional[float] = None


class _Point(SexpRecord):
    x: int
    y: int


def _point_schema(head: str):
    return positional(head, leaf("x", float, unit=Unit.NM), leaf("y", float, unit=Unit.NM))


class XY(_Point):
    sexp_schema = _point_schema("xy")


class Start(_Point):
    sexp_schema = _point_schema("start")


class Mid(_Point):
    sexp_schema = _point_schema("mid")


class End(_Point):
    sexp_schema = _point_schema("end")


class Center(_Point):
    sexp_schema = _point_schema("center")


class Offset(_Point):
    sexp_schema = _point_schema("offset")


class Points(SexpRecord):
    """Point list: ``(pts (xy x y) ...)``."""

    sexp_schema = positional("pts", repeated(leaf("xy", XY, field="points")))

    points: tuple[XY, ...] = ()


class Position(SexpRecord):
    """Location and rotation: ``(at x y [angle])``. The angle is in degrees."""

    sexp_schema = positional(
        "at",
        leaf("x", float, unit=Unit.NM),
        leaf("y", float, unit=Unit.NM),
        optional(leaf("angle", float)),
    )

    x: int
    y: int
    angle: Optional[float] = None


class Size(SexpRecord):
    """``(size height width)``; KiCad writes the height first."""

    sexp_schema = positional(
        "size",
        leaf("height", float, unit=Unit.NM_UNSIGNED),
        leaf("width", float, unit=Unit.NM_UNSIGNED),
    )

    height: int
    width: int


class Font(SexpRecord):
    sexp_schema = keyed(
        "font",
        optional(headed("face", str)),
        leaf("size", Size),
        optional(headed("thickness", float, unit=Unit.NM)),
        flag("bold"),
        optional(headed("bold", bool)),
        flag("italic"),
        optional(headed("italic", bool)),
        optional(headed("line_spacing", float)),
        optional(leaf("color", Color)),
    )

    face: Optional[str] = None
    size: Size
    thickness: Optional[int] = None
    bold: bool = False
    italic: bool = False
    line_spacing: Optional[float] = None
    color: Optional[Color] = None


class LineStyle(SexpEnum):
    DASH = "dash"
    DASH_DOT = "dash_dot"
    DASH_DOT_DOT = "dash_dot_dot"
    DOT = "dot"
    DEFAULT = "default"
    SOLID = "solid"


class Stroke(SexpRecord):
    sexp_schema = keyed(
        "stroke",
        optional(headed("width", float, unit=Unit.NM)),
        optional(headed("type", LineStyle, field="line_style")),
        optional(leaf("color", Color)),
    )

    width: Optional[int] = None
    line_style: Optional[LineStyle] = None
    color: Optional[Color] = None


class FillType(SexpEnum):
    NONE = "none"
    OUTLINE = "outline"
    BACKGROUND = "background"
    COLOR = "color"


class Fill(SexpRecord):
    sexp_schema = keyed(
        "fill",
        optional(headed("type", FillType, field="fill_type")),
        optional(leaf("color", Color)),
    )

    fill_type: Optional[FillType] = None
    color: Optional[Color] = None


class HorizJustify(SexpEnum):
    LEFT = "left"
    RIGHT = "right"


class VertJustify(SexpEnum):
    TOP = "top"
    BOTTOM = "bottom"


class TextJustify(SexpRecord):
    """``(justify [left|right] [top|bottom] [mirror])``; absent means centered."""

    sexp_schema = positional(
        "justify",
        optional(leaf("horizontal", HorizJustify)),
        optional(leaf("vertical", VertJustify)),
        flag("mirror"),
    )

    horizontal: Optional[HorizJustify] = None
    vertical: Optional[VertJustify] = None
    mirror: bool = False


class TextEffects(SexpRecord):
    sexp_schema = keyed(
        "effects",
        optional(leaf("font", Font)),
        optional(leaf("justify", TextJustify)),
        flag("hide"),
        optional(headed("hide", bool)),
    )

    font: Optional[Font] = None
    justify: Optional[TextJustify] = None
    hide: bool = False


class Property(SexpRecord):
    """Key/value property: ``(property "Reference" "R1" (at ...) (effects ...))``."""

    sexp_schema = keyed(
        "property",
        optional(headed("id", int, field="identifier")),
        optional(leaf("at", Position, field="position")),
        optional(leaf("effects", TextEffects)),
        flag("hide"),
        optional(headed("hide", bool)),
        prefix=(leaf("key", str), leaf("value", str)),
    )

    key: str
    value: str
    identifier: Optional[int] = None
    position: Optional[Position] = None
    effects: Optional[TextEffects] = None
    hide: bool = False


class PaperSize(SexpEnum):
    A0 = "A0"
    A1 = "A1"
    A2 = "A2"
    A3 = "A3"
    A4 = "A4"
    A5 = "A5"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    US_LETTER = "USLetter"
    US_LEGAL = "USLegal"
    US_LEDGER = "USLedger"
    USER = "User"

    def to_sexp(self) -> Any:
        # Paper sizes are written as quoted strings.
        return self.value


class Paper(SexpRecord):
    """``(paper "A4" [portrait])`` or ``(paper "User" height width [portrait])``."""

    sexp_schema = positional(
        "paper",
        leaf("size", PaperSize),
        optional(leaf("height", float, unit=Unit.NM_UNSIGNED)),
        optional(leaf("width", float, unit=Unit.NM_UNSIGNED)),
        flag("portrait"),
    )

    size: PaperSize
    height: Optional[int] = None
    width: Optional[int] = None
    portrait: bool = False

    @classmethod
    def sexp_check(cls, values: dict[str, Any], whole: Any) -> None:
        if values["size"] is PaperSize.USER:
            for dimension in ("height", "width"):
                if dimension not in values:
                    raise MissingFieldError("paper", dimension, whole)
        elif "height" in values or "width" in values:
            raise UnexpectedError(whole)

    @property
    def is_portrait(self) -> bool:
        return self.portrait


class TitleBlockComment(SexpRecord):
    sexp_schema = positional("comment", leaf("number", int), leaf("text", str))

    number: int
    text: str


class TitleBlock(SexpRecord):
    sexp_schema = keyed(
        "title_block",
        optional(headed("title", str)),
        optional(headed("date", str)),
        optional(headed("rev", str)),
        optional(headed("company", str)),
        repeated(leaf("comment", TitleBlockComment, field="comments")),
    )

    title: Optional[str] = None
    date: Optional[str] = None
    rev: Optional[str] = None
    company: Optional[str] = None
    comments: tuple[TitleBlockComment, ...] = ()

    def comment(self, number: int) -> Optional[str]:
        """Return the text of comment ``number`` (1-9), if present."""
        for item in self.comments:
            if item.number == number:
                return item.text
        return None
