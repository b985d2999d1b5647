"""Adapter from the ``sexpdata`` reader to the cons-cell value model."""

from __future__ import annotations

from typing import Any

import sexpdata

from kicad_sexp.models.errors import InvalidFileFormatError
from kicad_sexp.sexp.values import NIL, Pair, Symbol


def read_sexp(text: str) -> Any:
    """Read one s-expression from ``text``.

    ``sexpdata`` would otherwise turn ``nil`` into an empty list and ``t``
    into ``True``; KiCad uses neither convention, so both stay symbols.

    Raises:
        InvalidFileFormatError: If the text is not a single well-formed
            s-expression.
    """
    if not text.strip():
        raise InvalidFileFormatError("Empty s-expression input")

    try:
        parsed = sexpdata.loads(text, nil=None, true=None, false=None)
    except Exception as e:
        raise InvalidFileFormatError(f"Malformed s-expression: {e}") from e

    return _convert(parsed)


def _convert(data: Any) -> Any:
    """Convert sexpdata's output into ``Symbol`` / ``Pair`` / ``NIL`` values."""
    if isinstance(data, sexpdata.Symbol):
        return Symbol(str(data))
    if isinstance(data, list):
        result: Any = NIL
        for item in reversed(data):
            result = Pair(_convert(item), result)
        return result
    if isinstance(data, bool):
        raise InvalidFileFormatError(f"Unexpected boolean literal {data!r}")
    if isinstance(data, (str, int, float)):
        return data
    raise InvalidFileFormatError(f"Unsupported s-expression element {data!r}")
