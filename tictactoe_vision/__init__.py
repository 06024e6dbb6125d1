"""
井字棋棋盘视觉系统 (TicTacToe Vision)

从摄像头画面中定位棋盘、分割格子，并维护每个格子的状态。
"""

__version__ = "0.1.0"
__author__ = "TicTacToe Vision Team"
__description__ = "井字棋棋盘视觉系统 - 棋盘定位、格子分割与状态维护"

from tictactoe_vision.src import board_cells_recognition

__all__ = [
    "board_cells_recognition",
    "__version__",
    "__author__",
    "__description__",
]
