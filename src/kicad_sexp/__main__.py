"""CLI entry point: python -m kicad_sexp"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from kicad_sexp import __version__
from kicad_sexp.config import KiCadSexpConfig, LogLevel, TransportType
from kicad_sexp.logging_config import get_logger, setup_logging
from kicad_sexp.models.errors import KiCadSexpError, ParseError
from kicad_sexp.schema import registry
from kicad_sexp.utils import sexp_parser

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kicad-sexp",
        description="Parse KiCad schematic and symbol library files into typed records",
    )
    parser.add_argument(
        "--version", action="version", version=f"kicad-sexp {__version__}",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="KiCad file (.kicad_sch, .kicad_sym) or, with --record, a file holding one expression",
    )
    parser.add_argument(
        "--record",
        default=None,
        help="Parse FILE as a single expression of this record type (e.g. Symbol)",
    )
    parser.add_argument(
        "--format",
        action="store_true",
        help="Print the parsed record as KiCad s-expression text instead of JSON",
    )
    parser.add_argument(
        "--list-records",
        action="store_true",
        help="List the registered record types and exit",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run the MCP server instead of parsing",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default=None,
        help="MCP transport for --serve (default: stdio)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: INFO)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = {}
    if args.transport:
        overrides["transport"] = TransportType(args.transport)
    if args.log_level:
        overrides["log_level"] = LogLevel(args.log_level)
    config = KiCadSexpConfig(**overrides)

    if args.serve:
        from kicad_sexp.server import create_server
        mcp = create_server(config)
        if config.transport == TransportType.SSE:
            mcp.run(transport="sse", host=config.sse_host, port=config.sse_port)
        else:
            mcp.run(transport="stdio")
        return 0

    setup_logging(level=config.log_level.value, log_file=config.log_file)

    if args.list_records:
        _list_records()
        return 0

    if not args.file:
        parser.error("FILE is required unless --list-records or --serve is given")

    try:
        if args.record:
            text = Path(args.file).read_text(encoding="utf-8")
            record = sexp_parser.parse_expression(text, args.record)
        else:
            record = sexp_parser.parse_kicad_file(args.file, config.max_file_size)
    except ParseError as e:
        print(json.dumps({"status": "error", "error": e.to_dict()}, indent=2), file=sys.stderr)
        return 1
    except (KiCadSexpError, OSError) as e:
        logger.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.format:
        print(record.to_text())
    else:
        print(json.dumps(record.model_dump(mode="json"), indent=2))
    return 0


def _list_records() -> None:
    # sexp_parser imports kicad_sexp.records, so every record is registered here.
    file_records = {registry.for_file_head(head).__name__: head for head in registry.file_heads()}
    for name in registry.record_names():
        head = registry.lookup(name).sexp_schema.head
        suffix = f"  [file: {file_records[name]}]" if name in file_records else ""
        print(f"{name:20s} ({head} ...){suffix}")


if __name__ == "__main__":
    sys.exit(main())
