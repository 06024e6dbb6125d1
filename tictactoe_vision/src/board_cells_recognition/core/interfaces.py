"""
棋盘格识别系统核心接口定义

定义了系统中的异常类、常量、默认配置以及逐帧处理的结果数据结构。
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


# ============================================================================
# 异常类定义
# ============================================================================

class BoardRecognitionError(Exception):
    """棋盘格识别系统基础异常"""
    pass


class InsufficientContoursError(BoardRecognitionError):
    """
    轮廓数量不足异常

    棋盘定位或格子分割阶段找到的轮廓少于所需数量时抛出，
    当前帧的处理会被中止。
    """

    def __init__(self, stage: str, found: int, required: int):
        message = f"轮廓数量不足 - 阶段: {stage}, 找到 {found} 个, 至少需要 {required} 个"
        super().__init__(message)
        self.stage = stage
        self.found = found
        self.required = required


class GridOrderingError(BoardRecognitionError):
    """网格排序异常"""
    pass


class CellCountMismatchError(BoardRecognitionError):
    """已建立的棋盘与本帧检测到的格子数量不一致"""

    def __init__(self, expected: int, found: int):
        message = f"格子数量不一致: 棋盘有 {expected} 个格子, 本帧检测到 {found} 个"
        super().__init__(message)
        self.expected = expected
        self.found = found


class DataValidationError(BoardRecognitionError):
    """数据验证异常"""
    pass


class ConfigurationError(BoardRecognitionError):
    """配置异常"""
    pass


# ============================================================================
# 常量定义
# ============================================================================

# 格子状态标记
COL_EMPTY = "empty"
COL_RED = "red"
COL_BLUE = "blue"

VALID_STATES = (COL_EMPTY, COL_RED, COL_BLUE)

# 二值化默认阈值 (白色棋盘)
DEFAULT_THRESHOLD = 150
DEFAULT_MAX_VALUE = 255

# 默认配置
DEFAULT_CONFIG = {
    "preprocessing": {
        "threshold": DEFAULT_THRESHOLD,
        "max_value": DEFAULT_MAX_VALUE,
    },
    "ordering": {
        "strategy": "row_bucket",  # row_bucket, scan_order
        "row_tolerance": 0.5,
    },
    "board": {
        "redetect_on_count_change": False,
    },
    "logging": {
        "level": "INFO",
        "file": None,
        "max_size": "10MB",
        "backup_count": 5,
        "console_output": True,
    }
}


# ============================================================================
# 数据结构定义
# ============================================================================

@dataclass
class BoardSnapshot:
    """某一帧处理完成后的棋盘快照"""
    states: Tuple[str, ...]
    centroids: Tuple[Tuple[int, int], ...]
    is_full: bool
    is_empty: bool
    frame_index: int
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """验证快照数据"""
        if len(self.states) != len(self.centroids):
            raise ValueError(
                f"状态数量与质心数量不一致: {len(self.states)} != {len(self.centroids)}"
            )
        for state in self.states:
            if state not in VALID_STATES:
                raise ValueError(f"无效的格子状态: {state}")
        if self.frame_index < 0:
            raise ValueError(f"帧序号不能为负数，当前值: {self.frame_index}")

    @property
    def num_cells(self) -> int:
        """格子数量"""
        return len(self.states)


@dataclass
class FrameResult:
    """单帧处理结果"""
    success: bool
    snapshot: BoardSnapshot
    error: Optional[str] = None
    processing_time: float = 0.0  # 毫秒

    def __post_init__(self):
        """验证处理结果"""
        if self.success and self.error is not None:
            raise ValueError("成功的处理结果不能携带错误信息")
        if self.processing_time < 0:
            raise ValueError(f"处理时间不能为负数，当前值: {self.processing_time}")
