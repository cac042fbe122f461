"""JSONL log of terminal commands and window transitions."""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from core.event_bus import COMMAND_EVALUATED


class AuditLogger:
    """Appends one JSON line per desktop event.

    Command lines are stored as a sha256 digest, never verbatim.
    """

    def __init__(self, log_path: Path) -> None:
        self.log_path = log_path
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.logger = logging.getLogger("fluxo.audit")

    @staticmethod
    def _hash_line(line: str) -> str:
        return hashlib.sha256(line.encode("utf-8")).hexdigest()

    def _record(self, event_name: str, payload: dict[str, Any]) -> dict[str, Any]:
        if event_name != COMMAND_EVALUATED:
            return {"event": event_name, **payload}
        return {
            "event": event_name,
            "line_hash": self._hash_line(str(payload.get("line", ""))),
            "window_id": payload.get("window_id"),
            "ok": bool(payload.get("ok")),
            "output_chars": len(str(payload.get("output", ""))),
        }

    def handle(self, event_name: str, payload: dict[str, Any]) -> None:
        """Event bus callback."""
        event = {"timestamp": datetime.now(UTC).isoformat(), **self._record(event_name, payload)}
        line = json.dumps(event, ensure_ascii=True, default=str)
        with self.log_path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
        self.logger.debug(line)

    def read(self) -> list[dict[str, Any]]:
        if not self.log_path.exists():
            return []
        with self.log_path.open("r", encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
