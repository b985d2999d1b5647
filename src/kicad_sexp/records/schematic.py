"""Schematic file records: ``(kicad_sch ...)`` and its drawing items."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from kicad_sexp.records.common import (
    Color,
    Paper,
    Points,
    Position,
    Property,
    Stroke,
    TextEffects,
    TitleBlock,
)
from kicad_sexp.records.symbol import Symbol
from kicad_sexp.schema.coerce import SexpEnum
from kicad_sexp.schema.record import SexpRecord
from kicad_sexp.schema.shapes import flag, headed, keyed, leaf, optional, positional, repeated
from kicad_sexp.utils.units import Unit


class Junction(SexpRecord):
    sexp_schema = keyed(
        "junction",
        leaf("at", Position, field="position"),
        headed("diameter", float, unit=Unit.NM_UNSIGNED),
        leaf("color", Color),
        headed("uuid", UUID),
    )

    position: Position
    diameter: int
    color: Color
    uuid: UUID


class NoConnect(SexpRecord):
    sexp_schema = keyed(
        "no_connect",
        leaf("at", Position, field="position"),
        headed("uuid", UUID),
    )

    position: Position
    uuid: UUID


class BusEntrySize(SexpRecord):
    """Offset from a bus entry's start to its end; either axis may be negative."""

    sexp_schema = positional(
        "size",
        leaf("x", float, unit=Unit.NM),
        leaf("y", float, unit=Unit.NM),
    )

    x: int
    y: int


class BusEntry(SexpRecord):
    sexp_schema = keyed(
        "bus_entry",
        leaf("at", Position, field="position"),
        leaf("size", BusEntrySize),
        leaf("stroke", Stroke),
        headed("uuid", UUID),
    )

    position: Position
    size: BusEntrySize
    stroke: Stroke
    uuid: UUID


class Wire(SexpRecord):
    sexp_schema = keyed(
        "wire",
        leaf("pts", Points, field="points"),
        leaf("stroke", Stroke),
        headed("uuid", UUID),
    )

    points: Points
    stroke: Stroke
    uuid: UUID


class Bus(SexpRecord):
    sexp_schema = keyed(
        "bus",
        leaf("pts", Points, field="points"),
        leaf("stroke", Stroke),
        headed("uuid", UUID),
    )

    points: Points
    stroke: Stroke
    uuid: UUID


class SchematicPolyline(SexpRecord):
    """Graphical line on a sheet; not necessarily closed."""

    sexp_schema = keyed(
        "polyline",
        leaf("pts", Points, field="points"),
        leaf("stroke", Stroke),
        headed("uuid", UUID),
    )

    points: Points
    stroke: Stroke
    uuid: UUID


class SchematicText(SexpRecord):
    sexp_schema = keyed(
        "text",
        optional(headed("exclude_from_sim", bool)),
        leaf("at", Position, field="position"),
        leaf("effects", TextEffects),
        headed("uuid", UUID),
        prefix=(leaf("text", str),),
    )

    text: str
    exclude_from_sim: Optional[bool] = None
    position: Position
    effects: TextEffects
    uuid: UUID


class Label(SexpRecord):
    """Local net label."""

    sexp_schema = keyed(
        "label",
        leaf("at", Position, field="position"),
        flag("fields_autoplaced"),
        optional(headed("fields_autoplaced", bool)),
        leaf("effects", TextEffects),
        headed("uuid", UUID),
        repeated(leaf("property", Property, field="properties")),
        prefix=(leaf("text", str),),
    )

    text: str
    position: Position
    fields_autoplaced: bool = False
    effects: TextEffects
    uuid: UUID
    properties: tuple[Property, ...] = ()


class LabelShape(SexpEnum):
    INPUT = "input"
    OUTPUT = "output"
    BIDIRECTIONAL = "bidirectional"
    TRI_STATE = "tri_state"
    PASSIVE = "passive"


class GlobalLabel(SexpRecord):
    sexp_schema = keyed(
        "global_label",
        headed("shape", LabelShape),
        flag("fields_autoplaced"),
        optional(headed("fields_autoplaced", bool)),
        leaf("at", Position, field="position"),
        leaf("effects", TextEffects),
        headed("uuid", UUID),
        repeated(leaf("property", Property, field="properties")),
        prefix=(leaf("text", str),),
    )

    text: str
    shape: LabelShape
    fields_autoplaced: bool = False
    position: Position
    effects: TextEffects
    uuid: UUID
    properties: tuple[Property, ...] = ()


class Schematic(SexpRecord):
    """A whole ``.kicad_sch`` file.

    Only the items listed in the schema are supported; placed symbol
    instances and hierarchical sheets are rejected as unexpected.
    """

    sexp_file_head = "kicad_sch"
    sexp_schema = keyed(
        "kicad_sch",
        headed("version", int),
        headed("generator", str),
        optional(headed("generator_version", str)),
        optional(headed("uuid", UUID)),
        optional(leaf("paper", Paper)),
        optional(leaf("title_block", TitleBlock)),
        optional(headed("lib_symbols", None, repeated(leaf("symbol", Symbol, field="lib_symbols")))),
        repeated(leaf("junction", Junction, field="junctions")),
        repeated(leaf("no_connect", NoConnect, field="no_connects")),
        repeated(leaf("bus_entry", BusEntry, field="bus_entries")),
        repeated(leaf("wire", Wire, field="wires")),
        repeated(leaf("bus", Bus, field="buses")),
        repeated(leaf("polyline", SchematicPolyline, field="polylines")),
        repeated(leaf("text", SchematicText, field="texts")),
        repeated(leaf("label", Label, field="labels")),
        repeated(leaf("global_label", GlobalLabel, field="global_labels")),
    )

    version: int
    generator: str
    generator_version: Optional[str] = None
    uuid: Optional[UUID] = None
    paper: Optional[Paper] = None
    title_block: Optional[TitleBlock] = None
    lib_symbols: tuple[Symbol, ...] = ()
    junctions: tuple[Junction, ...] = ()
    no_connects: tuple[NoConnect, ...] = ()
    bus_entries: tuple[BusEntry, ...] = ()
    wires: tuple[Wire, ...] = ()
    buses: tuple[Bus, ...] = ()
    polylines: tuple[SchematicPolyline, ...] = ()
    texts: tuple[SchematicText, ...] = ()
    labels: tuple[Label, ...] = ()
    global_labels: tuple[GlobalLabel, ...] = ()

    def find_lib_symbol(self, lib_id: str) -> Optional[Symbol]:
        for symbol in self.lib_symbols:
            if symbol.id == lib_id:
                return symbol
        return None
