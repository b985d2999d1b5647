"""Input validation for KiCad file paths."""

from __future__ import annotations

from pathlib import Path

from kicad_sexp.models.errors import InvalidFileFormatError, InvalidPathError

KICAD_SCHEMATIC_EXT = ".kicad_sch"
KICAD_SYMBOL_LIB_EXT = ".kicad_sym"

# Extensions of the s-expression files this package can load.
SUPPORTED_EXTENSIONS = (KICAD_SCHEMATIC_EXT, KICAD_SYMBOL_LIB_EXT)


def validate_kicad_path(path: str | Path, expected_ext: str | None = None) -> Path:
    """Validate a path to an existing KiCad file.

    Args:
        path: File path.
        expected_ext: Expected file extension (e.g. '.kicad_sch'). When not
            given, any supported KiCad extension is accepted.

    Returns:
        Resolved Path object.

    Raises:
        InvalidPathError: If the path is empty, missing, not a file, or has
            the wrong extension.
    """
    if not path:
        raise InvalidPathError("File path cannot be empty")

    p = Path(path).resolve()

    if not p.exists():
        raise InvalidPathError(f"File not found: {p}", {"path": str(p)})
    if not p.is_file():
        raise InvalidPathError(f"Not a file: {p}", {"path": str(p)})

    allowed = (expected_ext,) if expected_ext else SUPPORTED_EXTENSIONS
    if p.suffix not in allowed:
        raise InvalidPathError(
            f"Expected {' or '.join(allowed)} file, got '{p.suffix}': {p}",
            {"path": str(p), "expected": list(allowed)},
        )

    return p


def validate_file_size(path: Path, max_size: int) -> int:
    """Return the file size, rejecting files larger than ``max_size`` bytes."""
    size = path.stat().st_size
    if size > max_size:
        raise InvalidFileFormatError(
            f"File is too large ({size} bytes, limit {max_size}): {path}",
            {"path": str(path), "size": size, "max_size": max_size},
        )
    return size
