"""Encode records back into s-expression values.

Fields are written in schema order. A field targeted by several shapes is
written once, at the first shape that targets it; a repeated field shared
by several record shapes (symbol graphics) keeps its stored order because
every item encodes itself.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from kicad_sexp.schema.shapes import Flag, HeadedList, OptionalShape, Repeated
from kicad_sexp.sexp.values import Symbol, cons_list
from kicad_sexp.utils.units import nm_to_mm


def encode_value(value: Any, unit: Any = None) -> Any:
    if unit is not None:
        return nm_to_mm(value)
    if isinstance(value, bool):
        return Symbol("yes" if value else "no")
    if isinstance(value, UUID):
        return str(value)
    if hasattr(value, "to_sexp"):
        return value.to_sexp()
    return value


def _encode_payload(shape: Any, value: Any) -> Any:
    if isinstance(shape, HeadedList) and not shape.delegates:
        return cons_list(Symbol(shape.head), encode_value(value, shape.unit))
    return encode_value(value, shape.unit)


def encode_shape(shape: Any, record: Any, emitted: set[str], optional: bool = False) -> list[Any]:
    """Return the elements ``shape`` contributes for ``record``."""
    if isinstance(shape, OptionalShape):
        return encode_shape(shape.inner, record, emitted, optional=True)

    if isinstance(shape, HeadedList) and shape.destructured:
        inner: list[Any] = []
        for item in shape.items:
            inner.extend(encode_shape(item, record, emitted))
        if optional and not inner:
            return []
        return [cons_list(Symbol(shape.head), *inner)]

    target = shape.inner if isinstance(shape, Repeated) else shape
    if target.field in emitted:
        return []
    emitted.add(target.field)
    value = getattr(record, target.field)

    if isinstance(shape, Repeated):
        return [_encode_payload(target, item) for item in value]
    if isinstance(shape, Flag):
        return [Symbol(shape.name)] if value else []
    if value is None:
        return []
    return [_encode_payload(shape, value)]


def encode_record(record: Any) -> Any:
    """Build the ``(head ...)`` list for a record instance."""
    schema = type(record).sexp_schema
    elements: list[Any] = [Symbol(schema.head)]
    emitted: set[str] = set()
    for shape in schema.positional + schema.keyed:
        elements.extend(encode_shape(shape, record, emitted))
    return cons_list(*elements)
