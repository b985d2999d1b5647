"""Unit conversion utilities for KiCad measurements."""

from __future__ import annotations

from enum import Enum

# KiCad serializes lengths in millimeters; its internal unit is nanometers (nm)
NM_PER_MM = 1_000_000


class Unit(str, Enum):
    """Conversion applied to a millimeter leaf while parsing."""

    NM = "nm"
    NM_UNSIGNED = "nm_unsigned"


def mm_to_nm(mm: float) -> int:
    """Convert millimeters to nanometers (KiCad internal unit).

    The result is truncated toward zero, not rounded, matching KiCad's own
    conversion: ``mm_to_nm(1.0000009)`` is ``1000000`` and
    ``mm_to_nm(-0.0000015)`` is ``-1``.
    """
    return int(mm * NM_PER_MM)


def nm_to_mm(nm: int) -> float:
    """Convert nanometers to millimeters."""
    return nm / float(NM_PER_MM)


NM_PER_MIL = 25_400
NM_PER_INCH = 25_400_000


def mil_to_nm(mil: float) -> int:
    """Convert mils (thousandths of an inch) to nanometers, truncating."""
    return int(mil * NM_PER_MIL)


def nm_to_mil(nm: int) -> float:
    return nm / float(NM_PER_MIL)


def inch_to_nm(inch: float) -> int:
    return int(inch * NM_PER_INCH)


def nm_to_inch(nm: int) -> float:
    return nm / float(NM_PER_INCH)


_FROM_NM = {"nm": float, "mm": nm_to_mm, "mil": nm_to_mil, "inch": nm_to_inch, "in": nm_to_inch}


def nm_to_unit(nm: int, unit: str) -> float:
    """Express a nanometer length in 'nm', 'mm', 'mil' or 'inch'.

    Raises:
        ValueError: If unit is not recognized.
    """
    try:
        return _FROM_NM[unit.lower().strip()](nm)
    except KeyError:
        raise ValueError(f"Unknown unit '{unit}'. Supported: nm, mm, mil, inch") from None
