"""Settings for the CLI and MCP server, read from ``KICAD_SEXP_*`` variables."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR_NAME = ".kicad-sexp"


class TransportType(str, Enum):
    STDIO = "stdio"
    SSE = "sse"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class KiCadSexpConfig(BaseSettings):
    """Runtime configuration.

    Every field can be set from the environment with the ``KICAD_SEXP_``
    prefix (``KICAD_SEXP_MAX_FILE_SIZE=1048576``) or from a ``.env`` file.
    """

    model_config = SettingsConfigDict(env_prefix="KICAD_SEXP_", env_file=".env", extra="ignore")

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_file: Optional[Path] = Field(
        default=None,
        description="Log file. Defaults to <data dir>/logs/kicad-sexp.log when serving",
    )
    transport: TransportType = Field(
        default=TransportType.STDIO,
        description="MCP transport for --serve: stdio or sse",
    )
    sse_host: str = Field(default="127.0.0.1", description="SSE bind address")
    sse_port: int = Field(default=8765, description="SSE port")
    max_file_size: int = Field(
        default=50 * 1024 * 1024,
        gt=0,
        description="Largest .kicad_sch/.kicad_sym file, in bytes, that will be read",
    )
    change_log_path: Optional[Path] = Field(
        default=None,
        description="Audit log of tool calls. Defaults to <data dir>/logs/changes.jsonl",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    def get_data_dir(self) -> Path:
        """Per-user directory for logs, created on first use."""
        if os.name == "nt":
            base = Path(os.environ.get("USERPROFILE", Path.home()))
        else:
            base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
        data_dir = base / DATA_DIR_NAME
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_log_dir(self) -> Path:
        log_dir = self.get_data_dir() / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir

    def get_log_file_path(self) -> Path:
        return _ensure_parent(self.log_file) if self.log_file else self.get_log_dir() / "kicad-sexp.log"

    def get_change_log_path(self) -> Path:
        if self.change_log_path:
            return _ensure_parent(self.change_log_path)
        return self.get_log_dir() / "changes.jsonl"


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path
