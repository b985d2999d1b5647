"""Library symbol records: ``(symbol "Device:R" ...)`` and their parts."""

from __future__ import annotations

from typing import Optional, Union

from kicad_sexp.records.common import (
    Center,
    End,
    Fill,
    Mid,
    Points,
    Position,
    Property,
    Start,
    Stroke,
    TextEffects,
)
from kicad_sexp.schema.coerce import SexpEnum
from kicad_sexp.schema.record import SexpRecord
from kicad_sexp.schema.shapes import flag, headed, keyed, leaf, optional, repeated
from kicad_sexp.utils.units import Unit


class PinNumberDefaults(SexpRecord):
    sexp_schema = keyed("pin_numbers", flag("hide"), optional(headed("hide", bool)))

    hide: bool = False


class PinNameDefaults(SexpRecord):
    sexp_schema = keyed(
        "pin_names",
        optional(headed("offset", float, unit=Unit.NM)),
        flag("hide"),
        optional(headed("hide", bool)),
    )

    offset: Optional[int] = None
    hide: bool = False


# --- Graphics ---

class Arc(SexpRecord):
    sexp_schema = keyed(
        "arc",
        leaf("start", Start),
        leaf("mid", Mid),
        leaf("end", End),
        leaf("stroke", Stroke),
        leaf("fill", Fill),
    )

    start: Start
    mid: Mid
    end: End
    stroke: Stroke
    fill: Fill


class Bezier(SexpRecord):
    sexp_schema = keyed(
        "bezier",
        leaf("pts", Points, field="points"),
        leaf("stroke", Stroke),
        leaf("fill", Fill),
    )

    points: Points
    stroke: Stroke
    fill: Fill


class Circle(SexpRecord):
    sexp_schema = keyed(
        "circle",
        leaf("center", Center),
        headed("radius", float, unit=Unit.NM_UNSIGNED),
        leaf("stroke", Stroke),
        leaf("fill", Fill),
    )

    center: Center
    radius: int
    stroke: Stroke
    fill: Fill


class Polyline(SexpRecord):
    sexp_schema = keyed(
        "polyline",
        leaf("pts", Points, field="points"),
        leaf("stroke", Stroke),
        leaf("fill", Fill),
    )

    points: Points
    stroke: Stroke
    fill: Fill


class Rectangle(SexpRecord):
    sexp_schema = keyed(
        "rectangle",
        leaf("start", Start),
        leaf("end", End),
        leaf("stroke", Stroke),
        leaf("fill", Fill),
    )

    start: Start
    end: End
    stroke: Stroke
    fill: Fill


class GraphicText(SexpRecord):
    sexp_schema = keyed(
        "text",
        leaf("at", Position, field="position"),
        leaf("effects", TextEffects),
        prefix=(leaf("text", str),),
    )

    text: str
    position: Position
    effects: TextEffects


SymbolGraphic = Union[Arc, Bezier, Circle, Polyline, Rectangle, GraphicText]


# --- Pins ---

class PinElectricalType(SexpEnum):
    INPUT = "input"
    OUTPUT = "output"
    BIDIRECTIONAL = "bidirectional"
    TRI_STATE = "tri_state"
    PASSIVE = "passive"
    FREE = "free"
    UNSPECIFIED = "unspecified"
    POWER_IN = "power_in"
    POWER_OUT = "power_out"
    OPEN_COLLECTOR = "open_collector"
    OPEN_EMITTER = "open_emitter"
    NO_CONNECT = "no_connect"


class PinGraphicalStyle(SexpEnum):
    LINE = "line"
    INVERTED = "inverted"
    CLOCK = "clock"
    INVERTED_CLOCK = "inverted_clock"
    INPUT_LOW = "input_low"
    CLOCK_LOW = "clock_low"
    OUTPUT_LOW = "output_low"
    EDGE_CLOCK_HIGH = "edge_clock_high"
    NON_LOGIC = "non_logic"


class PinName(SexpRecord):
    sexp_schema = keyed(
        "name",
        optional(leaf("effects", TextEffects)),
        prefix=(leaf("name", str),),
    )

    name: str
    effects: Optional[TextEffects] = None


class PinNumber(SexpRecord):
    sexp_schema = keyed(
        "number",
        optional(leaf("effects", TextEffects)),
        prefix=(leaf("number", str),),
    )

    number: str
    effects: Optional[TextEffects] = None


class Pin(SexpRecord):
    """``(pin passive line (at 0 3.81 270) (length 1.27) (name "~") (number "1"))``"""

    sexp_schema = keyed(
        "pin",
        leaf("at", Position, field="position"),
        headed("length", float, unit=Unit.NM),
        flag("hide"),
        optional(headed("hide", bool)),
        leaf("name", PinName),
        leaf("number", PinNumber),
        prefix=(
            leaf("electrical_type", PinElectricalType),
            leaf("graphical_style", PinGraphicalStyle),
        ),
    )

    electrical_type: PinElectricalType
    graphical_style: PinGraphicalStyle
    position: Position
    length: int
    hide: bool = False
    name: PinName
    number: PinNumber


class Symbol(SexpRecord):
    """A library symbol, or one unit of a parent symbol.

    Units are nested ``symbol`` lists named ``<parent>_<unit>_<style>``.
    """

    sexp_schema = keyed(
        "symbol",
        optional(headed("extends", str)),
        optional(leaf("pin_numbers", PinNumberDefaults)),
        optional(leaf("pin_names", PinNameDefaults)),
        optional(headed("exclude_from_sim", bool)),
        optional(headed("in_bom", bool)),
        optional(headed("on_board", bool)),
        repeated(leaf("property", Property, field="properties")),
        repeated(leaf("arc", Arc, field="graphics")),
        repeated(leaf("bezier", Bezier, field="graphics")),
        repeated(leaf("circle", Circle, field="graphics")),
        repeated(leaf("polyline", Polyline, field="graphics")),
        repeated(leaf("rectangle", Rectangle, field="graphics")),
        repeated(leaf("text", GraphicText, field="graphics")),
        repeated(leaf("pin", Pin, field="pins")),
        repeated(leaf("symbol", "Symbol", field="units")),
        prefix=(leaf("id", str),),
    )

    id: str
    extends: Optional[str] = None
    pin_numbers: Optional[PinNumberDefaults] = None
    pin_names: Optional[PinNameDefaults] = None
    exclude_from_sim: Optional[bool] = None
    in_bom: Optional[bool] = None
    on_board: Optional[bool] = None
    properties: tuple[Property, ...] = ()
    graphics: tuple[SymbolGraphic, ...] = ()
    pins: tuple[Pin, ...] = ()
    units: tuple[Symbol, ...] = ()

    def get_property(self, key: str) -> Optional[str]:
        for prop in self.properties:
            if prop.key == key:
                return prop.value
        return None

    def all_pins(self) -> list[Pin]:
        """Pins of this symbol and of every unit, depth first."""
        result = list(self.pins)
        for unit in self.units:
            result.extend(unit.all_pins())
        return result
