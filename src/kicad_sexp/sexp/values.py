"""Cons-cell value model for KiCad s-expressions.

A value is one of:

- ``Symbol``: a bare identifier such as ``yes`` or ``kicad_sch``
- ``str``: a quoted string literal
- ``int`` / ``float``: a number
- ``Pair``: a cons cell with a ``head`` and a ``tail``
- ``NIL``: the end-of-list marker

A proper list is a chain of ``Pair`` objects whose last ``tail`` is ``NIL``.
Values are never mutated once built; matchers only read through them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterator, Union


class Symbol(str):
    """A bare symbol. Compares equal to the plain string with the same text."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Symbol({str.__repr__(self)})"


class _Nil:
    """The end-of-list marker. Use the ``NIL`` singleton."""

    _instance: _Nil | None = None

    def __new__(cls) -> _Nil:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NIL"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Nil, ())


NIL = _Nil()


@dataclass(frozen=True, eq=False, repr=False)
class Pair:
    """A cons cell."""

    head: Any
    tail: Any = NIL

    def __eq__(self, other: object) -> bool:
        # Walk tails iteratively; long top-level lists would exhaust the stack.
        left: Any = self
        right: Any = other
        while isinstance(left, Pair):
            if not isinstance(right, Pair) or left.head != right.head:
                return False
            if type(left.head) is not type(right.head):
                return False
            left, right = left.tail, right.tail
        return left == right and type(left) is type(right)

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"Pair({format_value(self)})"

    def __iter__(self) -> Iterator[Any]:
        """Iterate over the elements of the (possibly improper) list.

        Iteration stops at the first tail that is not a ``Pair``.
        """
        cursor: Any = self
        while isinstance(cursor, Pair):
            yield cursor.head
            cursor = cursor.tail

    def __str__(self) -> str:
        return format_value(self)


SExpr = Union[Symbol, str, int, float, Pair, _Nil]

# Symbols that print without quotes. Anything else is written as a string.
_BARE_SYMBOL = re.compile(r"^[^\s()\"]+$")


def is_atom(value: Any) -> bool:
    """Return True for symbols, strings and numbers."""
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_symbol(value: Any, name: str | None = None) -> bool:
    """Return True if ``value`` is a symbol, optionally with the given text."""
    if not isinstance(value, Symbol):
        return False
    return name is None or value == name


def head_symbol(value: Any) -> Symbol | None:
    """Return the leading symbol of a list, or None if there is none."""
    if isinstance(value, Pair) and isinstance(value.head, Symbol):
        return value.head
    return None


def cons_list(*items: Any, tail: Any = NIL) -> Any:
    """Build a list from ``items``, ending in ``tail``."""
    result = tail
    for item in reversed(items):
        result = Pair(item, result)
    return result


def from_python(data: Any) -> Any:
    """Convert nested Python lists into cons cells.

    Lists and tuples become proper lists; ``Symbol``, strings and numbers are
    kept as they are. An empty list becomes ``NIL``.
    """
    if isinstance(data, (list, tuple)):
        return cons_list(*(from_python(item) for item in data))
    if data is None:
        return NIL
    if isinstance(data, bool) or not is_atom(data):
        raise TypeError(f"Cannot convert {data!r} to an s-expression value")
    return data


def to_python(value: Any) -> Any:
    """Convert cons cells back into nested Python lists.

    Raises:
        ValueError: If ``value`` contains an improper list.
    """
    if value is NIL:
        return []
    if isinstance(value, Pair):
        result = []
        cursor = value
        while isinstance(cursor, Pair):
            result.append(to_python(cursor.head))
            cursor = cursor.tail
        if cursor is not NIL:
            raise ValueError(f"Improper list ending in {cursor!r}")
        return result
    return value


def _format_atom(value: Any) -> str:
    if isinstance(value, Symbol):
        if _BARE_SYMBOL.match(value):
            return str(value)
        return _quote(value)
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, float):
        text = repr(value)
        # KiCad never writes exponents; expand them keeping every repr digit.
        if "e" in text or "E" in text:
            text = format(Decimal(text), "f")
            if "." not in text:
                text += ".0"
        return text
    return str(value)


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def format_value(value: Any) -> str:
    """Render a value as s-expression text on a single line."""
    if value is NIL:
        return "()"
    if not isinstance(value, Pair):
        return _format_atom(value)

    parts = []
    cursor = value
    while isinstance(cursor, Pair):
        parts.append(format_value(cursor.head))
        cursor = cursor.tail
    if cursor is not NIL:
        parts.append(".")
        parts.append(format_value(cursor))
    return "(" + " ".join(parts) + ")"


def format_pretty(value: Any, indent: str = "  ", _level: int = 0) -> str:
    """Render a value the way KiCad lays out its files.

    Lists whose elements are all atoms stay on one line; any nested list
    starts a new, indented line.
    """
    if not isinstance(value, Pair):
        return format_value(value)
    if all(not isinstance(item, Pair) for item in value):
        return format_value(value)

    pad = "\n" + indent * (_level + 1)
    text = "("
    nested = False
    for index, item in enumerate(value):
        if isinstance(item, Pair) or nested:
            nested = True
            text += pad + format_pretty(item, indent, _level + 1)
        else:
            text += ("" if index == 0 else " ") + format_value(item)
    return text + "\n" + indent * _level + ")"
