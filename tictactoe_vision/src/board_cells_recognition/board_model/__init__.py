"""
棋盘数据模型

格子、棋盘以及外部棋盘消息。
"""

from .cell import Cell
from .board import Board
from .board_message import BoardMessage

__all__ = [
    'Cell',
    'Board',
    'BoardMessage',
]
