"""
TicTacToe Vision 源代码模块

包含子系统：
- board_cells_recognition: 棋盘格识别系统
"""

from . import board_cells_recognition

__all__ = [
    "board_cells_recognition",
]
