"""Symbol library file record: ``(kicad_symbol_lib ...)``."""

from __future__ import annotations

from typing import Optional

from kicad_sexp.records.symbol import Symbol
from kicad_sexp.schema.record import SexpRecord
from kicad_sexp.schema.shapes import headed, keyed, leaf, optional, repeated


class SymbolLibrary(SexpRecord):
    """A whole ``.kicad_sym`` file."""

    sexp_file_head = "kicad_symbol_lib"
    sexp_schema = keyed(
        "kicad_symbol_lib",
        headed("version", int),
        headed("generator", str),
        optional(headed("generator_version", str)),
        repeated(leaf("symbol", Symbol, field="symbols")),
    )

    version: int
    generator: str
    generator_version: Optional[str] = None
    symbols: tuple[Symbol, ...] = ()

    def find_symbol(self, name: str) -> Optional[Symbol]:
        """Find a symbol by name, with or without its ``Library:`` prefix."""
        for symbol in self.symbols:
            if symbol.id == name or symbol.id.split(":", 1)[-1] == name:
                return symbol
        return None
