"""
日志系统模块

所有组件的日志都挂在 board_cells_recognition 根记录器之下，
由命令行或调用方在启动时按配置统一设置输出位置和级别。
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional

from .interfaces import ConfigurationError


ROOT_LOGGER_NAME = "board_cells_recognition"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

_SIZE_UNITS = {
    'KB': 1024,
    'MB': 1024 ** 2,
    'GB': 1024 ** 3,
}


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str = "INFO",
    log_file: Optional[str] = None,
    max_size: str = "10MB",
    backup_count: int = 5,
    format_string: Optional[str] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    设置日志记录器，重复调用时替换已有的处理器

    Args:
        name: 日志记录器名称
        level: 日志级别 (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: 日志文件路径，None 表示不写文件
        max_size: 单个日志文件的最大大小，支持 KB, MB, GB 单位
        backup_count: 轮转保留的文件数量
        format_string: 自定义日志格式
        console_output: 是否输出到标准输出

    Returns:
        配置好的日志记录器

    Raises:
        ConfigurationError: 日志级别无效时抛出
    """
    log_level = _resolve_level(level)
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(format_string or LOG_FORMAT)
    for handler in _build_handlers(logger, log_file, max_size, backup_count, console_output):
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def _resolve_level(level: str) -> int:
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ConfigurationError(f"无效的日志级别: {level}")
    return resolved


def _build_handlers(logger: logging.Logger,
                    log_file: Optional[str],
                    max_size: str,
                    backup_count: int,
                    console_output: bool) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []

    if console_output:
        handlers.append(logging.StreamHandler(sys.stdout))

    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            handlers.append(RotatingFileHandler(
                log_file,
                maxBytes=_parse_size(max_size),
                backupCount=backup_count,
                encoding='utf-8'
            ))
        except OSError as e:
            # 文件不可写时只保留控制台输出
            logger.warning(f"无法设置文件日志处理器: {e}")

    return handlers


def _parse_size(size_str: str) -> int:
    """
    解析大小字符串为字节数

    Args:
        size_str: 大小字符串，如 "10MB", "512KB"；不带单位时按字节处理

    Returns:
        字节数
    """
    text = str(size_str).upper().strip()

    for unit, factor in _SIZE_UNITS.items():
        if text.endswith(unit):
            return int(float(text[:-len(unit)]) * factor)

    return int(text)


class LoggerMixin:
    """为定位器、分割器等组件提供按类名区分的日志记录器"""

    _logger: Optional[logging.Logger] = None

    @property
    def logger(self) -> logging.Logger:
        if self._logger is None:
            self._logger = get_logger(self.__class__.__name__)
        return self._logger


def configure_logging_from_config(config: Dict[str, Any]) -> logging.Logger:
    """
    按配置中的 logging 节设置根记录器

    Args:
        config: 完整配置字典

    Returns:
        根日志记录器
    """
    settings = config.get('logging', {})

    return setup_logger(
        level=settings.get('level', 'INFO'),
        log_file=settings.get('file'),
        max_size=settings.get('max_size', '10MB'),
        backup_count=settings.get('backup_count', 5),
        console_output=settings.get('console_output', True)
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """获取日志记录器，name 为 None 时返回根记录器"""
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
