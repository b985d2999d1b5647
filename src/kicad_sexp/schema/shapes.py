"""Declarative shape schemas for KiCad s-expression records.

A record schema names the record's head symbol and lists the shapes that
follow it. Shapes come in five variants:

``Leaf``
    One atom (or one nested record) stored in a field.
``HeadedList``
    A list introduced by a fixed symbol. It either holds one directly-typed
    payload, as in ``(thickness 0.15)`` or ``(stroke ...)``, or a sequence
    of sub-shapes that are destructured into the enclosing record's fields,
    as in ``(lib_symbols (symbol ...) (symbol ...))``.
``OptionalShape``
    Zero or one occurrence of the inner shape.
``Repeated``
    Zero or more occurrences of the inner shape, collected into a tuple.
``Flag``
    A bare symbol such as ``hide`` whose presence sets a boolean.

The positional shapes of a schema are matched in declaration order. The
keyed shapes that follow are matched in any order, each dispatched by its
key symbol through tables built once when the schema is created.

Example::

    positional("color",
        leaf("red", float), leaf("green", float), leaf("blue", float),
        optional(leaf("alpha", float)),
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union

from kicad_sexp.models.errors import SchemaError
from kicad_sexp.schema.coerce import TypeCategory, categorize
from kicad_sexp.utils.units import Unit


def is_record_type(target: Any) -> bool:
    """True for record classes and record forward references."""
    return isinstance(target, str) or hasattr(target, "sexp_schema")


def _check_unit(unit: Unit | None, target: Any, name: str) -> None:
    if unit is not None and categorize(target) is not TypeCategory.FLOAT:
        raise SchemaError(
            f"Unit conversion on '{name}' requires a float leaf, got {target!r}",
            {"shape": name},
        )


@dataclass(frozen=True)
class Leaf:
    """A single typed value.

    ``name`` is the value's name in KiCad's documentation; for record
    leaves it is also the record's head symbol, used as the dispatch key.
    ``field`` is the record attribute the value is stored in.
    """

    name: str
    type: Any
    field: str | None = None
    unit: Unit | None = None

    def __post_init__(self) -> None:
        if self.field is None:
            object.__setattr__(self, "field", self.name)
        categorize(self.type)
        _check_unit(self.unit, self.type, self.name)


@dataclass(frozen=True)
class HeadedList:
    """A list whose first element is the symbol ``head``."""

    head: str
    type: Any = None
    items: tuple = ()
    field: str | None = None
    unit: Unit | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        if (self.type is None) == (not self.items):
            raise SchemaError(
                f"List '{self.head}' needs either a payload type or sub-shapes, not both",
                {"shape": self.head},
            )
        if self.items:
            if self.field is not None or self.unit is not None:
                raise SchemaError(
                    f"Destructured list '{self.head}' cannot have its own field or unit",
                    {"shape": self.head},
                )
            for item in self.items:
                _check_shape(item)
            return
        if self.field is None:
            object.__setattr__(self, "field", self.head)
        categorize(self.type)
        _check_unit(self.unit, self.type, self.head)

    @property
    def destructured(self) -> bool:
        return bool(self.items)

    @property
    def delegates(self) -> bool:
        """True when the whole list is handed to a record's own parser."""
        return self.type is not None and is_record_type(self.type)


@dataclass(frozen=True)
class Flag:
    """A bare symbol; present means ``True``."""

    name: str
    field: str | None = None

    def __post_init__(self) -> None:
        if self.field is None:
            object.__setattr__(self, "field", self.name)


@dataclass(frozen=True)
class OptionalShape:
    inner: Any

    def __post_init__(self) -> None:
        if isinstance(self.inner, (OptionalShape, Repeated, Flag)):
            raise SchemaError(
                f"Optional cannot wrap {type(self.inner).__name__}",
                {"shape": repr(self.inner)},
            )
        _check_shape(self.inner)


@dataclass(frozen=True)
class Repeated:
    inner: Any

    def __post_init__(self) -> None:
        if isinstance(self.inner, (OptionalShape, Repeated, Flag)):
            raise SchemaError(
                f"Repeated cannot wrap {type(self.inner).__name__}",
                {"shape": repr(self.inner)},
            )
        if isinstance(self.inner, HeadedList) and self.inner.destructured:
            raise SchemaError(
                f"Repeated list '{self.inner.head}' must hold a single payload",
                {"shape": self.inner.head},
            )
        _check_shape(self.inner)


Shape = Union[Leaf, HeadedList, Flag, OptionalShape, Repeated]


def _check_shape(shape: Any) -> None:
    if not isinstance(shape, (Leaf, HeadedList, Flag, OptionalShape, Repeated)):
        raise SchemaError(f"Not a shape: {shape!r}", {"shape": repr(shape)})


# --- Builders ---

def leaf(name: str, type: Any, field: str | None = None, unit: Unit | None = None) -> Leaf:
    return Leaf(name, type, field, unit)


def headed(
    head: str,
    type: Any = None,
    *items: Shape,
    field: str | None = None,
    unit: Unit | None = None,
) -> HeadedList:
    """Build a ``HeadedList``.

    ``headed("width", float, unit=Unit.NM)`` holds one payload;
    ``headed("lib_symbols", None, repeated(...))`` destructures sub-shapes.
    """
    return HeadedList(head, type, tuple(items), field, unit)


def optional(inner: Shape) -> OptionalShape:
    return OptionalShape(inner)


def repeated(inner: Shape) -> Repeated:
    return Repeated(inner)


def flag(name: str, field: str | None = None) -> Flag:
    return Flag(name, field)


# --- Record schemas ---

@dataclass(frozen=True)
class SlotSpec:
    """A record field filled while matching.

    ``label`` is the s-expression name reported in errors.
    """

    field: str
    label: str
    repeated: bool = False


@dataclass(frozen=True)
class KeyedEntry:
    """Dispatch-table entry for one key of a keyed record."""

    key: str
    shape: Any
    repeated: bool = False
    required: bool = False


def _unwrap(shape: Shape) -> tuple[Any, bool, bool]:
    """Return (core shape, repeated, required)."""
    if isinstance(shape, OptionalShape):
        return shape.inner, False, False
    if isinstance(shape, Repeated):
        return shape.inner, True, False
    if isinstance(shape, Flag):
        return shape, False, False
    return shape, False, True


def iter_slots(shape: Shape, repeated: bool = False) -> Iterator[SlotSpec]:
    """Yield the fields a shape stores into, in declaration order."""
    if isinstance(shape, OptionalShape):
        yield from iter_slots(shape.inner, repeated)
    elif isinstance(shape, Repeated):
        yield from iter_slots(shape.inner, True)
    elif isinstance(shape, Flag):
        yield SlotSpec(shape.field, shape.name, repeated)
    elif isinstance(shape, HeadedList) and shape.destructured:
        for item in shape.items:
            yield from iter_slots(item, repeated)
    elif isinstance(shape, HeadedList):
        yield SlotSpec(shape.field, shape.head, repeated)
    else:
        yield SlotSpec(shape.field, shape.name, repeated)


@dataclass(frozen=True)
class RecordSchema:
    """Schema of one record type: head symbol, positional prefix, keyed tail.

    A record with no keyed shapes is closed: nothing may follow its last
    positional shape.
    """

    head: str
    positional: tuple = ()
    keyed: tuple = ()
    list_keys: dict = field(init=False, repr=False, compare=False)
    flag_keys: dict = field(init=False, repr=False, compare=False)
    slots: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "positional", tuple(self.positional))
        object.__setattr__(self, "keyed", tuple(self.keyed))
        for shape in self.positional + self.keyed:
            _check_shape(shape)

        list_keys: dict[str, KeyedEntry] = {}
        flag_keys: dict[str, KeyedEntry] = {}
        for shape in self.keyed:
            core, many, required = _unwrap(shape)
            if isinstance(core, Flag):
                table, key = flag_keys, core.name
            elif isinstance(core, HeadedList):
                table, key = list_keys, core.head
            elif isinstance(core, Leaf) and is_record_type(core.type):
                table, key = list_keys, core.name
            else:
                raise SchemaError(
                    f"Keyed shape in '{self.head}' must be a list, record or flag: {shape!r}",
                    {"record": self.head},
                )
            if key in table:
                raise SchemaError(
                    f"Key '{key}' appears twice in '{self.head}'",
                    {"record": self.head, "key": key},
                )
            table[key] = KeyedEntry(key, core, many, required)

        slots: dict[str, SlotSpec] = {}
        for shape in self.positional + self.keyed:
            for spec in iter_slots(shape):
                seen = slots.get(spec.field)
                if seen is None:
                    slots[spec.field] = spec
                elif seen.repeated != spec.repeated:
                    raise SchemaError(
                        f"Field '{spec.field}' of '{self.head}' is both repeated and singular",
                        {"record": self.head, "field": spec.field},
                    )

        object.__setattr__(self, "list_keys", list_keys)
        object.__setattr__(self, "flag_keys", flag_keys)
        object.__setattr__(self, "slots", tuple(slots.values()))

    @property
    def closed(self) -> bool:
        return not self.keyed

    def field_names(self) -> list[str]:
        return [spec.field for spec in self.slots]


def positional(head: str, *shapes: Shape) -> RecordSchema:
    """Schema for a fixed-order record such as ``(at x y [angle])``."""
    return RecordSchema(head, shapes, ())


def keyed(head: str, *shapes: Shape, prefix: tuple = ()) -> RecordSchema:
    """Schema for an order-independent record such as ``(stroke ...)``.

    ``prefix`` holds positional shapes read before the keyed elements, like
    the id string of ``(symbol "Device:R" ...)``.
    """
    return RecordSchema(head, tuple(prefix), shapes)
