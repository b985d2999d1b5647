"""Schema-driven decoder and encoder for KiCad s-expression files."""

__version__ = "0.3.0"
