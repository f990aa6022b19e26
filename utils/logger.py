"""
Logging setup for Market News Triage.

Modules log through loguru's shared `logger` with a bracketed component
tag ("[Collector]", "[Scorer]", "[NEWS-TRIAGE]"); this module only decides
where records go.

Usage:
    from utils import init_logging, logger

    init_logging(app_name="api")
    logger.info("[Collector] Searching 8 regions")
"""
import sys
from pathlib import Path
from typing import Optional

from loguru import logger


CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"
FILE_RETENTION = "30 days"

# Handlers are owned by this module; nothing logs until setup_logging runs
logger.remove()
_handler_ids: list[int] = []


def setup_logging(log_dir: Optional[Path] = None, log_level: str = "INFO", app_name: str = "app") -> None:
    """
    Replace the current sinks with a stderr sink and, if `log_dir` is given,
    a daily rotating file `<app_name>_<date>.log` (gzipped after rotation).

    Safe to call again: the previous sinks are removed first.
    """
    for handler_id in _handler_ids:
        logger.remove(handler_id)
    _handler_ids.clear()

    level = log_level.upper()
    _handler_ids.append(logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT))

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        _handler_ids.append(logger.add(
            log_dir / f"{app_name}_{{time:YYYY-MM-DD}}.log",
            level=level,
            format=FILE_FORMAT,
            rotation="00:00",
            retention=FILE_RETENTION,
            compression="gz",
            encoding="utf-8",
        ))
        logger.info(f"[Logging] Writing {app_name} logs to {log_dir}")


def init_logging(app_name: str = "app") -> None:
    """Configure logging from settings. Call once at process startup."""
    from config import settings, ensure_directories

    ensure_directories()
    setup_logging(
        log_dir=settings.LOG_DIR if settings.LOG_TO_FILE else None,
        log_level=settings.LOG_LEVEL,
        app_name=app_name,
    )


__all__ = ["logger", "setup_logging", "init_logging"]
