"""FastMCP server creation and tool registration."""

from __future__ import annotations

from fastmcp import FastMCP

from kicad_sexp import __version__
from kicad_sexp.config import KiCadSexpConfig
from kicad_sexp.logging_config import get_logger, setup_logging
from kicad_sexp.schema import registry
from kicad_sexp.tools import parse
from kicad_sexp.utils.change_log import ChangeLog

logger = get_logger("server")


def create_server(config: KiCadSexpConfig | None = None) -> FastMCP:
    """Create and configure the KiCad s-expression MCP server.

    Args:
        config: Server configuration. Uses defaults/env vars if not provided.

    Returns:
        Configured FastMCP server instance ready to run.
    """
    if config is None:
        config = KiCadSexpConfig()

    setup_logging(
        level=config.log_level.value,
        log_file=config.get_log_file_path(),
    )
    logger.info("kicad-sexp MCP server v%s starting", __version__)

    change_log = ChangeLog(config.get_change_log_path())

    mcp = FastMCP(
        "KiCad S-Expression Parser",
        version=__version__,
    )

    parse.register_tools(mcp, change_log, config.max_file_size)

    logger.info(
        "Server ready: %d record types, file types %s",
        len(registry.record_names()),
        ", ".join(registry.file_heads()),
    )
    return mcp
