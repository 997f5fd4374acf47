"""
日志工具

所有模块通过 get_logger(name) 取得 ``iris_care.<name>`` logger。
默认只输出到控制台；setup_logging 开启文件输出后，每个模块写入
``<log_dir>/<name>.log``，同时汇总到 ``<log_dir>/iris_care.log``（均按大小轮转）。

使用示例:
    from iris_care.utils.logger import get_logger

    logger = get_logger("opportunity_detector")
    logger.debug("Detected 3 opportunities")
"""

import functools
import logging
import logging.handlers
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from iris_care.core.defaults import DEFAULTS

NAMESPACE = "iris_care"
UNIFIED_LOG_NAME = f"{NAMESPACE}.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(module)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class LogSettings:
    """当前生效的日志设置，初值取自 DEFAULTS.log"""
    level: str = DEFAULTS.log.level
    console_output: bool = DEFAULTS.log.console_output
    file_output: bool = DEFAULTS.log.file_output
    max_bytes: int = DEFAULTS.log.max_file_size * 1024 * 1024
    backup_count: int = DEFAULTS.log.backup_count
    log_dir: Optional[Path] = None
    format: str = LOG_FORMAT


_settings = LogSettings()
_loggers: Dict[str, logging.Logger] = {}


def _rotating_handler(path: Path, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=_settings.max_bytes,
        backupCount=_settings.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def _build_handlers(name: str) -> List[logging.Handler]:
    formatter = logging.Formatter(_settings.format, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = []

    if _settings.console_output:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        handlers.append(console)

    if _settings.file_output and _settings.log_dir is not None:
        handlers.append(_rotating_handler(_settings.log_dir / f"{name}.log", formatter))
        handlers.append(_rotating_handler(_settings.log_dir / UNIFIED_LOG_NAME, formatter))

    return handlers


def _configure_logger(logger: logging.Logger, name: str) -> None:
    """按当前设置重建 logger 的 handler"""
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    logger.setLevel(getattr(logging, _settings.level, logging.INFO))
    for handler in _build_handlers(name):
        logger.addHandler(handler)


def setup_logging(
    log_dir: Optional[Path] = None,
    level: str = DEFAULTS.log.level,
    max_bytes: int = DEFAULTS.log.max_file_size * 1024 * 1024,
    backup_count: int = DEFAULTS.log.backup_count,
    console_output: bool = DEFAULTS.log.console_output,
    file_output: bool = True,
    format_string: Optional[str] = None,
) -> None:
    """
    配置日志系统，已创建的 logger 立即按新设置重建

    Args:
        log_dir: 日志目录，默认为当前目录下的 logs
        level: 日志级别 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        max_bytes: 单个日志文件最大字节数
        backup_count: 轮转保留的备份数
        console_output: 是否输出到控制台
        file_output: 是否输出到文件
        format_string: 自定义日志格式
    """
    _settings.level = level.upper()
    _settings.max_bytes = max_bytes
    _settings.backup_count = backup_count
    _settings.console_output = console_output
    _settings.file_output = file_output
    _settings.log_dir = Path(log_dir) if log_dir is not None else Path.cwd() / "logs"
    if format_string:
        _settings.format = format_string

    if file_output:
        _settings.log_dir.mkdir(parents=True, exist_ok=True)

    for name, logger in _loggers.items():
        _configure_logger(logger, name)

    get_logger("logger_setup").info(
        f"Logging configured: level={_settings.level}, file_output={file_output}, log_dir={_settings.log_dir}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    获取（或创建并缓存）一个模块 logger

    Args:
        name: 模块名，如 "care_engine"、"memory_storage"
    """
    logger = _loggers.get(name)
    if logger is None:
        logger = logging.getLogger(f"{NAMESPACE}.{name}")
        _configure_logger(logger, name)
        _loggers[name] = logger
    return logger


class DebugLogger:
    """
    记录代码块耗时的上下文管理器，也可作为装饰器使用

    使用示例:
        with DebugLogger("care_cycle"):
            ...

        @DebugLogger("analyze")
        def analyze(...): ...
    """

    def __init__(self, name: str, log_args: bool = False):
        self.name = name
        self.log_args = log_args
        self.logger = get_logger("debug")
        self.start_time: Optional[float] = None

    def __call__(self, func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if self.log_args:
                self.logger.debug(f"{self.name} called with args={args} kwargs={kwargs}")
            # 每次调用使用独立的计时器，递归调用互不干扰
            with DebugLogger(self.name):
                return func(*args, **kwargs)
        return wrapper

    def __enter__(self) -> "DebugLogger":
        self.start_time = time.perf_counter()
        self.logger.debug(f"[START] {self.name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        elapsed = time.perf_counter() - (self.start_time or time.perf_counter())
        if exc_type is not None:
            self.logger.error(f"[ERROR] {self.name} - {elapsed:.3f}s - {exc_type.__name__}: {exc_val}")
        else:
            self.logger.debug(f"[END] {self.name} - {elapsed:.3f}s")


def init_logging_from_config(config_manager: Any, log_dir: Optional[Path] = None) -> None:
    """按 ConfigManager 中的 log 区块初始化日志"""
    setup_logging(
        log_dir=log_dir,
        level=config_manager.get("log.level"),
        max_bytes=config_manager.get("log.max_file_size") * 1024 * 1024,
        backup_count=config_manager.get("log.backup_count"),
        console_output=config_manager.get("log.console_output"),
        file_output=config_manager.get("log.file_output"),
    )


__all__ = [
    "get_logger",
    "setup_logging",
    "init_logging_from_config",
    "DebugLogger",
    "LogSettings",
]
