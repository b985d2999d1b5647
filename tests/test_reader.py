"""Tests for the sexpdata reader adapter."""

from __future__ import annotations

import pytest

from kicad_sexp.models.errors import InvalidFileFormatError
from kicad_sexp.sexp.reader import read_sexp
from kicad_sexp.sexp.values import NIL, Pair, Symbol, to_python


class TestReadSexp:
    def test_atoms_keep_their_types(self):
        value = read_sexp('(property "Value" 10k 1 2.5)')
        assert to_python(value) == [Symbol("property"), "Value", Symbol("10k"), 1, 2.5]
        items = list(value)
        assert isinstance(items[0], Symbol)
        assert not isinstance(items[1], Symbol)
        assert isinstance(items[3], int)
        assert isinstance(items[4], float)

    def test_nested_lists_are_pairs(self):
        value = read_sexp("(pts (xy 1 2) (xy 3 4))")
        assert isinstance(value, Pair)
        assert isinstance(value.tail.head, Pair)
        assert value.tail.tail.tail is NIL

    def test_nil_and_t_stay_symbols(self):
        value = read_sexp("(flags nil t)")
        assert list(value) == [Symbol("flags"), Symbol("nil"), Symbol("t")]

    def test_empty_list_is_nil(self):
        assert read_sexp("()") is NIL

    def test_multiline_with_tabs(self):
        value = read_sexp('(kicad_sch\n\t(version 20231120)\n\t(generator "eeschema")\n)')
        assert to_python(value) == [
            Symbol("kicad_sch"),
            [Symbol("version"), 20231120],
            [Symbol("generator"), "eeschema"],
        ]

    def test_empty_input(self):
        with pytest.raises(InvalidFileFormatError):
            read_sexp("   \n")

    def test_unbalanced(self):
        with pytest.raises(InvalidFileFormatError):
            read_sexp("(at 1 2")
