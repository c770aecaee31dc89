"""Unit tests for logger setup."""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from greenlight.settings import settings
from greenlight.utils.logger import _LOGGERS_CACHE, _log_file_path, get_logger, setup_logger


class TestSetupLogger:
    @staticmethod
    def test_console_only_without_log_dir() -> None:
        logger = setup_logger("test.logger.console")
        assert isinstance(logger, logging.Logger)
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    @staticmethod
    def test_level_applied_to_handlers() -> None:
        logger = setup_logger("test.logger.level", level="DEBUG")
        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)

    @staticmethod
    def test_cache_returns_same_instance() -> None:
        logger1 = setup_logger("test.logger.cached")
        logger2 = setup_logger("test.logger.cached", level=logging.ERROR)
        assert logger1 is logger2
        assert logger1.level == logging.INFO
        assert "test.logger.cached" in _LOGGERS_CACHE

    @staticmethod
    def test_propagate_disabled() -> None:
        assert setup_logger("test.logger.propagate").propagate is False

    @staticmethod
    def test_file_handler_with_log_dir(tmp_path: Path) -> None:
        logger = setup_logger("test.logger.file", log_dir=tmp_path / "logs")
        file_handlers = [h for h in logger.handlers if isinstance(h, TimedRotatingFileHandler)]
        assert len(file_handlers) == 1

        logger.info("hello file")
        file_handlers[0].flush()
        content = (tmp_path / "logs" / "test_logger_file.log").read_text(encoding="utf-8")
        assert "| INFO     | test.logger.file | hello file" in content
        file_handlers[0].close()

    @staticmethod
    def test_unwritable_log_dir_falls_back_to_console(tmp_path: Path) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("x", encoding="utf-8")
        logger = setup_logger("test.logger.blocked", log_dir=blocker / "logs")
        assert len(logger.handlers) == 1


class TestGetLogger:
    @staticmethod
    def test_uses_logging_settings() -> None:
        logger = get_logger("test.logger.from_settings")
        # LOG_DIR is empty under test, so no file handler.
        assert len(logger.handlers) == 1
        assert logger.level == logging.getLevelName(settings.logging.level)


class TestLogFilePath:
    @staticmethod
    def test_creates_directory(tmp_path: Path) -> None:
        log_dir = tmp_path / "nested" / "logs"
        path = _log_file_path("greenlight.api", log_dir)
        assert log_dir.is_dir()
        assert path == log_dir / "greenlight_api.log"

    @staticmethod
    def test_sanitizes_slashes(tmp_path: Path) -> None:
        assert _log_file_path("a/b.c", tmp_path).name == "a_b_c.log"
