"""Base class for records parsed from KiCad s-expressions."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from kicad_sexp.models.errors import SchemaError
from kicad_sexp.schema import registry
from kicad_sexp.schema.encoder import encode_record
from kicad_sexp.schema.matcher import match_record
from kicad_sexp.schema.shapes import RecordSchema
from kicad_sexp.sexp.reader import read_sexp
from kicad_sexp.sexp.values import Pair, format_pretty, format_value, is_symbol


class SexpRecord(BaseModel):
    """An immutable record described by a ``RecordSchema``.

    Subclasses set ``sexp_schema`` and declare one model field per schema
    field. Subclasses that parse a whole KiCad file also set
    ``sexp_file_head``. Each subclass is checked and registered when the
    class is created.
    """

    model_config = ConfigDict(frozen=True)

    sexp_schema: ClassVar[RecordSchema]
    sexp_file_head: ClassVar[str | None] = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        schema = cls.__dict__.get("sexp_schema")
        if schema is None:
            return
        missing = [name for name in schema.field_names() if name not in cls.model_fields]
        if missing:
            raise SchemaError(
                f"Record {cls.__name__} has no model fields for {', '.join(missing)}",
                {"record": cls.__name__, "fields": missing},
            )
        registry.register(cls, cls.__dict__.get("sexp_file_head"))

    @classmethod
    def accepts(cls, value: Any) -> bool:
        return isinstance(value, Pair) and is_symbol(value.head, cls.sexp_schema.head)

    @classmethod
    def try_parse(cls, value: Any) -> Any:
        """Parse an s-expression value.

        Raises:
            ParseError: If the value does not match the record's schema.
        """
        return match_record(cls, value)

    @classmethod
    def from_text(cls, text: str) -> Any:
        return cls.try_parse(read_sexp(text))

    @classmethod
    def sexp_check(cls, values: dict[str, Any], whole: Any) -> None:
        """Cross-field validation hook, run before the record is built."""

    def to_sexp(self) -> Any:
        return encode_record(self)

    def to_text(self, pretty: bool = True) -> str:
        if pretty:
            return format_pretty(self.to_sexp())
        return format_value(self.to_sexp())
