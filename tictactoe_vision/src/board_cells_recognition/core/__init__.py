"""
棋盘格识别系统核心模块

包含系统的异常类、数据结构、配置管理和日志功能。
"""

from .interfaces import (
    BoardRecognitionError,
    InsufficientContoursError,
    GridOrderingError,
    CellCountMismatchError,
    DataValidationError,
    ConfigurationError,
    BoardSnapshot,
    FrameResult,
    COL_EMPTY,
    COL_RED,
    COL_BLUE,
    VALID_STATES,
    DEFAULT_CONFIG,
)

from .config import ConfigManager
from .logger import setup_logger, LoggerMixin

__all__ = [
    "BoardRecognitionError",
    "InsufficientContoursError",
    "GridOrderingError",
    "CellCountMismatchError",
    "DataValidationError",
    "ConfigurationError",
    "BoardSnapshot",
    "FrameResult",
    "COL_EMPTY",
    "COL_RED",
    "COL_BLUE",
    "VALID_STATES",
    "DEFAULT_CONFIG",
    "ConfigManager",
    "setup_logger",
    "LoggerMixin",
]
