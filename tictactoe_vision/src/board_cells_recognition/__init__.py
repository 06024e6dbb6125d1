"""
棋盘格识别系统 - 基于轮廓的井字棋棋盘状态识别

该模块提供：
- 棋盘外边界与内部区域定位
- 格子分割和行优先排序
- 格子/棋盘状态模型及外部消息转换
- 逐帧处理入口
"""

__version__ = "0.1.0"
__author__ = "TicTacToe Vision Team"

from .core.interfaces import (
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
)
from .core.config import ConfigManager
from .core.logger import setup_logger

from .board_model import Board, BoardMessage, Cell
from .inference import ColorEvidenceProvider, FrameProcessor

__all__ = [
    # 数据模型
    "Cell",
    "Board",
    "BoardMessage",
    "BoardSnapshot",
    "FrameResult",
    # 处理入口
    "FrameProcessor",
    "ColorEvidenceProvider",
    # 状态标记
    "COL_EMPTY",
    "COL_RED",
    "COL_BLUE",
    # 异常类
    "BoardRecognitionError",
    "InsufficientContoursError",
    "GridOrderingError",
    "CellCountMismatchError",
    "DataValidationError",
    "ConfigurationError",
    # 工具类
    "ConfigManager",
    "setup_logger",
]
