"""Shared test fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from kicad_sexp.utils.change_log import ChangeLog

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def sample_schematic_path() -> Path:
    return FIXTURES_DIR / "sample_schematic.kicad_sch"


@pytest.fixture
def sample_library_path() -> Path:
    return FIXTURES_DIR / "sample_library.kicad_sym"


@pytest.fixture
def tmp_change_log(tmp_path: Path) -> ChangeLog:
    return ChangeLog(tmp_path / "test_changes.jsonl")


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep config-derived logs and audit files inside the test's tmp dir."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("USERPROFILE", str(tmp_path / "config"))
    for name in list(os.environ):
        if name.startswith("KICAD_SEXP_"):
            monkeypatch.delenv(name)
