"""loguru sinks for the CLI and the API service."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from loguru import logger

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def json_line(record: dict[str, Any]) -> str:
    """Render one record as a JSON object; ``extra`` values become top-level keys."""
    payload: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "where": f"{record['name']}:{record['function']}:{record['line']}",
    }
    for key, value in record["extra"].items():
        payload.setdefault(key, _plain(value))

    exc = record["exception"]
    if exc is not None and exc.type is not None:
        payload["exception"] = f"{exc.type.__name__}: {exc.value}"

    # loguru treats the returned string as a format template
    return json.dumps(payload, ensure_ascii=False).replace("{", "{{").replace("}", "}}") + "\n"


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def setup_logging(*, level: str = "INFO", json_format: bool = False, log_file: Path | None = None) -> None:
    """Replace every loguru sink with a stderr sink and, optionally, a rotating file.

    Args:
        level: Minimum level name for both sinks.
        json_format: Emit one JSON object per line instead of coloured text.
        log_file: Extra file sink, rotated at 10 MB and kept for a week.
    """
    logger.remove()
    fmt: Any = json_line if json_format else TEXT_FORMAT

    logger.add(sys.stderr, format=fmt, level=level, colorize=not json_format)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, format=fmt, level=level, rotation="10 MB", retention="7 days", compression="zip")
