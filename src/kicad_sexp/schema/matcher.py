"""Structural matcher: walks a cons list against a record schema.

Two disciplines are supported. Positional shapes consume elements in
declaration order with one element of lookahead for optional and repeated
shapes. Keyed shapes are matched in any order, dispatched by the symbol that
heads each element (or by the bare symbol itself for flags).

The matcher never catches its own errors: the first failure propagates to
the caller with the offending sub-expression attached.
"""

from __future__ import annotations

from typing import Any

from kicad_sexp.models.errors import (
    DuplicateFieldError,
    ExpectedListError,
    ExpectedNamedSymbolError,
    ExpectedNilError,
    ExpectedSymbolError,
    InvalidDimensionError,
    MissingFieldError,
    UnexpectedError,
)
from kicad_sexp.schema.coerce import accepts, coerce
from kicad_sexp.schema.shapes import (
    Flag,
    HeadedList,
    KeyedEntry,
    Leaf,
    OptionalShape,
    RecordSchema,
    Repeated,
)
from kicad_sexp.schema.slots import SlotTable, assemble
from kicad_sexp.sexp.values import NIL, Pair, Symbol, is_symbol
from kicad_sexp.utils.units import Unit, mm_to_nm


def expect_headed(value: Any, head: str) -> Any:
    """Check that ``value`` is a list starting with ``head``; return the rest."""
    if not isinstance(value, Pair):
        raise ExpectedListError(value)
    if not isinstance(value.head, Symbol):
        raise ExpectedSymbolError(value)
    if value.head != head:
        raise ExpectedNamedSymbolError(value, head)
    return value.tail


def expect_nil(cursor: Any) -> None:
    if cursor is not NIL:
        raise ExpectedNilError(cursor)


def convert(value: Any, target: Any, unit: Unit | None, field: str) -> Any:
    """Coerce one value and apply the shape's unit conversion."""
    result = coerce(value, target)
    if unit is None:
        return result
    if unit is Unit.NM_UNSIGNED and result < 0:
        raise InvalidDimensionError(result, field)
    return mm_to_nm(result)


def flag_names(shapes: Any) -> frozenset[str]:
    """Names of the flags in a positional sequence, reserved from scalar lookahead."""
    return frozenset(shape.name for shape in shapes if isinstance(shape, Flag))


def shape_accepts(shape: Any, element: Any, reserved: frozenset[str] = frozenset()) -> bool:
    """Lookahead used by optional and repeated shapes.

    A scalar leaf takes any atom except a flag name from the same sequence,
    so ``(paper "A4" portrait)`` leaves the optional height unset.
    """
    if isinstance(shape, Flag):
        return is_symbol(element, shape.name)
    if isinstance(shape, HeadedList):
        return isinstance(element, Pair) and is_symbol(element.head, shape.head)
    if isinstance(element, Symbol) and element in reserved:
        return False
    return accepts(element, shape.type)


# --- Positional discipline ---

def match_shape(
    shape: Any, cursor: Any, slots: SlotTable, reserved: frozenset[str] = frozenset(),
) -> Any:
    """Match one positional shape at ``cursor``; return the advanced cursor."""
    if isinstance(shape, OptionalShape):
        if isinstance(cursor, Pair) and shape_accepts(shape.inner, cursor.head, reserved):
            return match_shape(shape.inner, cursor, slots)
        return cursor

    if isinstance(shape, Repeated):
        while isinstance(cursor, Pair) and shape_accepts(shape.inner, cursor.head, reserved):
            cursor = match_shape(shape.inner, cursor, slots)
        return cursor

    if isinstance(shape, Flag):
        if isinstance(cursor, Pair) and is_symbol(cursor.head, shape.name):
            slots.store(shape.field, True, cursor.head)
            return cursor.tail
        return cursor

    if not isinstance(cursor, Pair):
        raise ExpectedListError(cursor)

    if isinstance(shape, HeadedList):
        match_headed(shape, cursor.head, slots)
    else:
        value = convert(cursor.head, shape.type, shape.unit, shape.field)
        slots.store(shape.field, value, cursor.head)
    return cursor.tail


def match_headed(shape: HeadedList, element: Any, slots: SlotTable) -> None:
    """Match a whole ``(head ...)`` element and store what it holds."""
    if shape.delegates:
        slots.store(shape.field, coerce(element, shape.type), element)
        return

    rest = expect_headed(element, shape.head)
    if shape.destructured:
        reserved = flag_names(shape.items)
        for item in shape.items:
            rest = match_shape(item, rest, slots, reserved)
        expect_nil(rest)
        return

    if not isinstance(rest, Pair):
        raise ExpectedListError(rest)
    value = convert(rest.head, shape.type, shape.unit, shape.field)
    expect_nil(rest.tail)
    slots.store(shape.field, value, element)


# --- Keyed discipline ---

def _dispatch(schema: RecordSchema, element: Any) -> KeyedEntry:
    if isinstance(element, Pair):
        if not isinstance(element.head, Symbol):
            raise ExpectedSymbolError(element)
        entry = schema.list_keys.get(element.head)
    elif isinstance(element, Symbol):
        entry = schema.flag_keys.get(element)
    else:
        raise UnexpectedError(element)
    if entry is None:
        raise UnexpectedError(element)
    return entry


def match_keyed(schema: RecordSchema, cursor: Any, slots: SlotTable, whole: Any) -> None:
    """Scan the keyed tail of a record until the list ends."""
    seen: set[KeyedEntry] = set()
    while cursor is not NIL:
        if not isinstance(cursor, Pair):
            raise ExpectedListError(cursor)
        element = cursor.head
        entry = _dispatch(schema, element)
        if entry in seen and not entry.repeated:
            raise DuplicateFieldError(schema.head, entry.key, element)
        seen.add(entry)

        shape = entry.shape
        if isinstance(shape, Flag):
            slots.store(shape.field, True, element)
        elif isinstance(shape, HeadedList):
            match_headed(shape, element, slots)
        elif isinstance(shape, Leaf):
            slots.store(shape.field, coerce(element, shape.type), element)
        cursor = cursor.tail

    for entry in schema.list_keys.values():
        if entry.required and entry not in seen:
            raise MissingFieldError(schema.head, entry.key, whole)


def match_record(record_type: Any, value: Any) -> Any:
    """Parse ``value`` into an instance of ``record_type``."""
    schema: RecordSchema = record_type.sexp_schema
    cursor = expect_headed(value, schema.head)
    slots = SlotTable(schema.head, schema.slots)

    reserved = flag_names(schema.positional)
    for shape in schema.positional:
        cursor = match_shape(shape, cursor, slots, reserved)

    if schema.closed:
        expect_nil(cursor)
    else:
        match_keyed(schema, cursor, slots, value)

    return assemble(record_type, slots, value)
