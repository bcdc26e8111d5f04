"""Opt-in JSONL sink for resolver diagnostics.

The library itself only emits DEBUG records through stdlib logging and never
installs a handler. Tools that want a trace of every probe call
init_json_logging() once at startup.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

DEFAULT_PATH = os.environ.get("NODE_RESOLVE_LOG_PATH", "./node-resolve.log.jsonl")
DEFAULT_LEVEL = os.environ.get("NODE_RESOLVE_LOG_LEVEL", "INFO").upper()

# Attributes every LogRecord carries; anything else came in through `extra=`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime", "taskName"}


class JsonlHandler(logging.Handler):
    """Appends one JSON object per record to a file."""

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = {
                "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
                "lvl": record.levelname,
                "schema": {"name": "node-resolve.log", "ver": "1.0.0"},
                "logger": record.name,
                "event": getattr(record, "event", None),
                "message": record.getMessage(),
            }
            for key, value in record.__dict__.items():
                if key not in _RECORD_ATTRS:
                    payload.setdefault(key, value)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")
        except Exception:
            self.handleError(record)


def init_json_logging(path: str | None = None, level: str | None = None) -> JsonlHandler:
    """Attach a JsonlHandler to the node_resolve logger, replacing any previous one."""
    path = path or DEFAULT_PATH
    level = (level or DEFAULT_LEVEL).upper()

    logger = logging.getLogger("node_resolve")
    logger.setLevel(getattr(logging, level, logging.INFO))
    for h in list(logger.handlers):
        if isinstance(h, JsonlHandler):
            logger.removeHandler(h)
            h.close()

    handler = JsonlHandler(path)
    logger.addHandler(handler)
    return handler
