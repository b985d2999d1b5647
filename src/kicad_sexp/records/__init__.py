"""Typed KiCad records.

Importing this package registers every record type, so file loaders and
forward references such as nested library symbols can find them by name.
"""

from kicad_sexp.records.common import (
    Center,
    Color,
    End,
    Fill,
    FillType,
    Font,
    HorizJustify,
    LineStyle,
    Mid,
    Offset,
    Paper,
    PaperSize,
    Points,
    Position,
    Property,
    Size,
    Start,
    Stroke,
    TextEffects,
    TextJustify,
    TitleBlock,
    TitleBlockComment,
    VertJustify,
    XY,
)
from kicad_sexp.records.library import SymbolLibrary
from kicad_sexp.records.schematic import (
    Bus,
    BusEntry,
    BusEntrySize,
    GlobalLabel,
    Junction,
    Label,
    LabelShape,
    NoConnect,
    Schematic,
    SchematicPolyline,
    SchematicText,
    Wire,
)
from kicad_sexp.records.symbol import (
    Arc,
    Bezier,
    Circle,
    GraphicText,
    Pin,
    PinElectricalType,
    PinGraphicalStyle,
    PinName,
    PinNameDefaults,
    PinNumber,
    PinNumberDefaults,
    Polyline,
    Rectangle,
    Symbol,
)
