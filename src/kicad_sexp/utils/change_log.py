"""JSONL audit trail of MCP tool calls."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from kicad_sexp.logging_config import get_logger

logger = get_logger("changelog")

# Expression text longer than this is cut before it is written.
MAX_PARAM_LENGTH = 500
TRUNCATION_MARK = "...(truncated)"


class ChangeLog:
    """One JSON object per line: timestamp, tool, params, status and outcome."""

    def __init__(self, log_path: Path) -> None:
        self._log_path = log_path
        self._log_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._log_path

    def record(
        self,
        tool_name: str,
        params: dict[str, Any],
        result_status: str = "success",
        record_type: str | None = None,
        error: str | None = None,
    ) -> None:
        """Append an entry. Write failures are logged, never raised to the tool."""
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "tool": tool_name,
            "params": _sanitize_params(params),
            "status": result_status,
        }
        if record_type:
            entry["record_type"] = record_type
        if error:
            entry["error"] = error

        try:
            with open(self._log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry) + "\n")
        except OSError as e:
            logger.error("Failed to write change log %s: %s", self._log_path, e)

    def get_recent(self, count: int = 20, tool_name: str | None = None) -> list[dict[str, Any]]:
        """Newest ``count`` entries, oldest first, optionally for one tool only."""
        if not self._log_path.exists():
            return []

        try:
            lines = self._log_path.read_text(encoding="utf-8").splitlines()
            entries = [json.loads(line) for line in lines if line.strip()]
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to read change log %s: %s", self._log_path, e)
            return []

        if tool_name is not None:
            entries = [e for e in entries if e.get("tool") == tool_name]
        return entries[-count:] if count > 0 else []


def _sanitize_params(params: dict[str, Any]) -> dict[str, Any]:
    return {
        key: value[:MAX_PARAM_LENGTH] + TRUNCATION_MARK
        if isinstance(value, str) and len(value) > MAX_PARAM_LENGTH else value
        for key, value in params.items()
    }
