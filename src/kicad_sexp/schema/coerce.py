"""Type coercion for schema leaves.

Every leaf target type falls into one of five categories:

- ``FLOAT``: ``float``
- ``INT``: ``int``
- ``STRING``: ``str``
- ``IDENTIFIER``: ``uuid.UUID``
- ``NESTED``: anything that parses itself - a record class (or its
  registered name), a ``SexpEnum`` subclass, or ``bool`` for KiCad's
  ``yes``/``no`` symbols.

``categorize`` is called while schemas are built so an unsupported type is
a ``SchemaError`` at import time, never a parse-time surprise.
"""

from __future__ import annotations

import math
import uuid
from enum import Enum
from typing import Any

from kicad_sexp.models.errors import (
    ExpectedFloatError,
    ExpectedIntError,
    ExpectedStrError,
    InvalidEnumSymbolError,
    InvalidIdentifierError,
    SchemaError,
    UnexpectedError,
)
from kicad_sexp.schema import registry
from kicad_sexp.sexp.values import Pair, Symbol, is_atom, is_number

TRUE_SYMBOLS = frozenset({"yes", "y", "true", "t"})
FALSE_SYMBOLS = frozenset({"no", "n", "false", "f"})


class TypeCategory(str, Enum):
    FLOAT = "float"
    INT = "int"
    STRING = "string"
    IDENTIFIER = "identifier"
    NESTED = "nested"


class SexpEnum(str, Enum):
    """An enumeration written in KiCad files as one of a fixed set of symbols."""

    @classmethod
    def symbols(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)

    @classmethod
    def accepts(cls, value: Any) -> bool:
        return isinstance(value, str) and value in cls._value2member_map_

    @classmethod
    def try_parse(cls, value: Any) -> SexpEnum:
        if not cls.accepts(value):
            raise InvalidEnumSymbolError(value, cls.symbols())
        return cls(str(value))

    def to_sexp(self) -> Any:
        return Symbol(self.value)


def categorize(target: Any) -> TypeCategory:
    """Classify a leaf target type.

    Raises:
        SchemaError: If the type is not supported.
    """
    if target is bool:
        return TypeCategory.NESTED
    if target is float:
        return TypeCategory.FLOAT
    if target is int:
        return TypeCategory.INT
    if target is str:
        return TypeCategory.STRING
    if target is uuid.UUID:
        return TypeCategory.IDENTIFIER
    if isinstance(target, str):
        # Forward reference to a record registered under this class name.
        return TypeCategory.NESTED
    if isinstance(target, type) and hasattr(target, "try_parse"):
        return TypeCategory.NESTED
    raise SchemaError(f"Unsupported leaf type: {target!r}", {"type": repr(target)})


def resolve(target: Any) -> Any:
    """Return the concrete type for ``target``, following record forward references."""
    if isinstance(target, str):
        return registry.lookup(target)
    return target


def coerce_float(value: Any) -> float:
    """Numbers only; ``nan`` and ``inf`` are read as floats but never valid."""
    if not is_number(value) or not math.isfinite(value):
        raise ExpectedFloatError(value)
    return float(value)


def coerce_int(value: Any) -> int:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ExpectedIntError(value)
    return value


def coerce_str(value: Any) -> str:
    if not isinstance(value, str):
        raise ExpectedStrError(value)
    return str(value)


def coerce_identifier(value: Any) -> uuid.UUID:
    text = coerce_str(value)
    try:
        return uuid.UUID(text)
    except ValueError:
        raise InvalidIdentifierError(text) from None


def coerce_bool(value: Any) -> bool:
    """Parse a KiCad boolean symbol (``yes``/``no`` and their spellings)."""
    if isinstance(value, Symbol):
        if value in TRUE_SYMBOLS:
            return True
        if value in FALSE_SYMBOLS:
            return False
    raise UnexpectedError(value)


def coerce(value: Any, target: Any) -> Any:
    """Convert one value into ``target``.

    Scalars expect an atom. Nested targets receive the value unchanged, so a
    record target is handed the whole ``(head ...)`` list and parses it
    itself; its errors propagate untouched.
    """
    if target is bool:
        return coerce_bool(value)
    if target is float:
        return coerce_float(value)
    if target is int:
        return coerce_int(value)
    if target is str:
        return coerce_str(value)
    if target is uuid.UUID:
        return coerce_identifier(value)
    return resolve(target).try_parse(value)


def accepts(value: Any, target: Any) -> bool:
    """One-element lookahead: could ``value`` be an instance of ``target``?

    Used by optional and repeated shapes to decide whether to consume the
    next element. Scalar targets take any atom, so ``(color 0 0 0 "x")``
    fails coercing ``"x"`` as the alpha rather than at the end of the list.
    Booleans, enumerations and records only take values they recognize.
    """
    if target is bool:
        return isinstance(value, Symbol) and (value in TRUE_SYMBOLS or value in FALSE_SYMBOLS)
    if categorize(target) is not TypeCategory.NESTED:
        return is_atom(value)
    concrete = resolve(target)
    if hasattr(concrete, "accepts"):
        return concrete.accepts(value)
    return isinstance(value, Pair)
