"""
推理模块

提供逐帧处理功能，包括：
- 棋盘定位、格子分割和排序
- 颜色证据的接入
- 棋盘状态推导和快照输出
"""

from .evidence import ColorEvidenceProvider
from .frame_processor import FrameProcessor

__all__ = [
    'ColorEvidenceProvider',
    'FrameProcessor',
]
