"""Custom exception hierarchy for kicad-sexp."""

from __future__ import annotations

from typing import Any, Iterable

from kicad_sexp.sexp.values import format_value


class KiCadSexpError(Exception):
    """Base exception for all kicad-sexp errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class SchemaError(KiCadSexpError):
    """A record schema is malformed. Raised when the schema is built, never while parsing."""


class ProjectError(KiCadSexpError):
    """Error related to KiCad files on disk."""


class InvalidFileFormatError(ProjectError):
    """File is not a valid KiCad s-expression file."""


class ValidationError(KiCadSexpError):
    """Input validation failed."""


class InvalidPathError(ValidationError):
    """File path is invalid or inaccessible."""


# --- Parse errors ---
#
# Every failure of the structural matcher is one of the classes below. The
# offending value is kept on the exception, not only in the message, so
# callers can point at the exact sub-expression.


class ParseError(KiCadSexpError):
    """An s-expression did not match the schema of the record being parsed."""

    kind = "ParseError"

    def __init__(self, message: str, value: Any, details: dict | None = None):
        super().__init__(message, details)
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        """Structured form used by the CLI and MCP tools."""
        return {
            "kind": self.kind,
            "message": str(self),
            "value": format_value(self.value),
            "details": dict(self.details),
        }


class ExpectedListError(ParseError):
    kind = "ExpectedList"

    def __init__(self, value: Any):
        super().__init__(f"Expected list: {format_value(value)}", value)


class ExpectedFloatError(ParseError):
    kind = "ExpectedFloat"

    def __init__(self, value: Any):
        super().__init__(f"Expected float: {format_value(value)}", value)


class ExpectedIntError(ParseError):
    kind = "ExpectedInt"

    def __init__(self, value: Any):
        super().__init__(f"Expected int: {format_value(value)}", value)


class ExpectedStrError(ParseError):
    kind = "ExpectedStr"

    def __init__(self, value: Any):
        super().__init__(f"Expected str: {format_value(value)}", value)


class ExpectedSymbolError(ParseError):
    """A symbol was required but the value was a list, string or number."""

    kind = "ExpectedSymbol"

    def __init__(self, value: Any):
        super().__init__(f"Expected symbol: {format_value(value)}", value)


class ExpectedNamedSymbolError(ParseError):
    """A particular symbol was required but a different one was found."""

    kind = "ExpectedNamedSymbol"

    def __init__(self, value: Any, name: str):
        super().__init__(
            f"Expected symbol {name}: {format_value(value)}", value, {"name": name},
        )
        self.name = name


class ExpectedNilError(ParseError):
    """A closed list still had content after the last expected element."""

    kind = "ExpectedNil"

    def __init__(self, value: Any):
        super().__init__(f"Expected nil: {format_value(value)}", value)


class MissingFieldError(ParseError):
    kind = "MissingField"

    def __init__(self, record: str, field: str, value: Any):
        super().__init__(
            f"Missing {record} field {field}: {format_value(value)}",
            value,
            {"record": record, "field": field},
        )
        self.record = record
        self.field = field


class DuplicateFieldError(ParseError):
    kind = "DuplicateField"

    def __init__(self, record: str, field: str, value: Any):
        super().__init__(
            f"Duplicate {record} field {field}: {format_value(value)}",
            value,
            {"record": record, "field": field},
        )
        self.record = record
        self.field = field


class UnexpectedError(ParseError):
    """An unknown key or a malformed element."""

    kind = "Unexpected"

    def __init__(self, value: Any):
        super().__init__(f"Unexpected value {format_value(value)}", value)


class InvalidIdentifierError(ParseError):
    kind = "InvalidIdentifier"

    def __init__(self, text: str):
        super().__init__(f"Invalid UUID {text}", text, {"text": text})
        self.text = text


class InvalidDimensionError(ParseError):
    """A width, height, radius or diameter was negative."""

    kind = "InvalidDimension"

    def __init__(self, value: float, dimension: str):
        super().__init__(
            f"Invalid {dimension} value {value}", value, {"dimension": dimension},
        )
        self.dimension = dimension


class InvalidEnumSymbolError(ParseError):
    kind = "InvalidEnumSymbol"

    def __init__(self, value: Any, expected: Iterable[str]):
        expected = tuple(expected)
        super().__init__(
            f"Expected one of {', '.join(expected)}, got {format_value(value)}",
            value,
            {"expected": list(expected)},
        )
        self.expected = expected
