"""Application logging.

Loggers write ``time | level | name | message`` lines to stdout and,
when a log directory is configured, to a file per logger that rolls
over at midnight. Each name is configured once and then reused.
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_BACKUP_DAYS = 14
_LOGGERS_CACHE: dict[str, logging.Logger] = {}


def setup_logger(
    name: str,
    level: int | str = logging.INFO,
    log_dir: Path | None = None,
) -> logging.Logger:
    """Configure and return a named logger.

    Args:
        name: Logger name (e.g., 'greenlight.api').
        level: Logging level (default INFO).
        log_dir: Directory for log files. If None, only stdout is used.

    Returns:
        Configured logger instance.
    """
    cached = _LOGGERS_CACHE.get(name)
    if cached is not None:
        return cached

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT)
    _attach(logger, logging.StreamHandler(sys.stdout), level, formatter)

    if log_dir is not None:
        try:
            file_handler = _create_file_handler(name, log_dir)
        except OSError as exc:
            logger.warning("file logging disabled for %s: %s", log_dir, exc)
        else:
            _attach(logger, file_handler, level, formatter)

    _LOGGERS_CACHE[name] = logger
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger configured from the logging settings."""
    from greenlight.settings import settings

    return setup_logger(name, level=settings.logging.level, log_dir=settings.logging.log_path)


def _attach(
    logger: logging.Logger,
    handler: logging.Handler,
    level: int | str,
    formatter: logging.Formatter,
) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def _create_file_handler(name: str, log_dir: Path) -> TimedRotatingFileHandler:
    """File handler rolling over at midnight, keeping two weeks of files.

    Raises:
        OSError: If the directory or file cannot be created.
    """
    return TimedRotatingFileHandler(
        _log_file_path(name, log_dir),
        when="midnight",
        backupCount=_BACKUP_DAYS,
        encoding="utf-8",
    )


def _log_file_path(name: str, log_dir: Path) -> Path:
    """``<log_dir>/<name with dots as underscores>.log``, creating the directory."""
    log_dir.mkdir(parents=True, exist_ok=True)
    safe_name = name.replace(".", "_").replace("/", "_")
    return log_dir / f"{safe_name}.log"
