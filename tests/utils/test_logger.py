import dataclasses
import logging

import pytest

from iris_care.utils import logger as logger_module


@pytest.fixture(autouse=True)
def restore_log_settings():
    saved = dataclasses.asdict(logger_module._settings)
    logger_module._loggers.clear()
    yield
    for key, value in saved.items():
        setattr(logger_module._settings, key, value)
    for name, logger in logger_module._loggers.items():
        logger_module._configure_logger(logger, name)
    logger_module._loggers.clear()


def test_settings_follow_defaults() -> None:
    settings = logger_module.LogSettings()
    assert settings.level == "INFO"
    assert settings.file_output is False
    assert settings.max_bytes == 10 * 1024 * 1024


def test_get_logger_uses_namespace_and_cache() -> None:
    logger = logger_module.get_logger("care_engine")

    assert logger.name == "iris_care.care_engine"
    assert logger_module.get_logger("care_engine") is logger


def test_default_level_is_info() -> None:
    assert logger_module.get_logger("level_check").level == logging.INFO


def test_setup_logging_writes_files(tmp_path) -> None:
    logger = logger_module.get_logger("file_check")
    logger_module.setup_logging(log_dir=tmp_path, level="DEBUG", console_output=False, file_output=True)

    logger.debug("hello file")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert "hello file" in (tmp_path / "file_check.log").read_text(encoding="utf-8")
    assert "hello file" in (tmp_path / "iris_care.log").read_text(encoding="utf-8")


def test_init_logging_from_config(tmp_path) -> None:
    from iris_care.core.config_manager import ConfigManager

    logger = logger_module.get_logger("config_check")
    manager = ConfigManager({"log": {"level": "WARNING", "console_output": False}})
    logger_module.init_logging_from_config(manager, tmp_path)

    assert logger.level == logging.WARNING
    assert logger.handlers == []


def test_debug_logger_decorator_reraises() -> None:
    @logger_module.DebugLogger("boom")
    def boom():
        raise ValueError("bad")

    with pytest.raises(ValueError):
        boom()


def test_debug_logger_context_manager_passes_result() -> None:
    @logger_module.DebugLogger("add")
    def add(a, b):
        return a + b

    with logger_module.DebugLogger("block") as block:
        assert add(1, 2) == 3
    assert block.start_time is not None
