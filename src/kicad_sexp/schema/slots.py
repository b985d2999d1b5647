"""Per-parse field slots and record assembly."""

from __future__ import annotations

from typing import Any

import pydantic

from kicad_sexp.models.errors import DuplicateFieldError, SchemaError
from kicad_sexp.schema.shapes import SlotSpec


class FieldSlot:
    """State of one record field during a single parse."""

    __slots__ = ("spec", "is_set", "value")

    def __init__(self, spec: SlotSpec):
        self.spec = spec
        self.is_set = False
        self.value: Any = [] if spec.repeated else None

    def set(self, value: Any, record: str, element: Any) -> None:
        if self.is_set:
            raise DuplicateFieldError(record, self.spec.label, element)
        self.value = value
        self.is_set = True

    def append(self, value: Any) -> None:
        self.value.append(value)
        self.is_set = True


class SlotTable:
    """All field slots of one record being parsed."""

    def __init__(self, record: str, specs: tuple[SlotSpec, ...]):
        self.record = record
        self._slots = {spec.field: FieldSlot(spec) for spec in specs}

    def store(self, field: str, value: Any, element: Any) -> None:
        """Set a singular field or append to a repeated one.

        Raises:
            DuplicateFieldError: If a singular field is already set.
        """
        slot = self._slots[field]
        if slot.spec.repeated:
            slot.append(value)
        else:
            slot.set(value, self.record, element)

    def is_set(self, field: str) -> bool:
        return self._slots[field].is_set

    def values(self) -> dict[str, Any]:
        """Values of every set slot; repeated fields become tuples."""
        result: dict[str, Any] = {}
        for name, slot in self._slots.items():
            if not slot.is_set:
                continue
            result[name] = tuple(slot.value) if slot.spec.repeated else slot.value
        return result


def assemble(record_type: Any, slots: SlotTable, whole: Any) -> Any:
    """Build the frozen record from filled slots.

    Unset fields fall back to the model defaults. The record's
    ``sexp_check`` hook runs first and may raise a ``ParseError`` for
    combinations the schema alone cannot express.
    """
    values = slots.values()
    record_type.sexp_check(values, whole)
    try:
        return record_type(**values)
    except pydantic.ValidationError as e:
        raise SchemaError(
            f"Record {record_type.__name__} rejected its parsed fields: {e}",
            {"record": record_type.__name__},
        ) from e
