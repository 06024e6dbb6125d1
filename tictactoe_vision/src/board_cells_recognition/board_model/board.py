"""
棋盘

按阅读顺序 (行优先) 排列的格子集合，提供整体状态操作以及
与外部棋盘消息之间的转换。
"""

import logging
from typing import Iterator, List

import numpy as np

from ..core.interfaces import COL_BLUE, COL_EMPTY, COL_RED
from ..segmentation.geometry import Contour, mask_image
from .board_message import BoardMessage
from .cell import Cell


logger = logging.getLogger(__name__)


class Board:
    """
    棋盘类

    棋盘的格子数量由分割流程在会话开始时确定，之后不再做结构上的限制。
    两个棋盘长度相同且逐个格子状态相同即视为相等，与几何信息无关。
    """

    def __init__(self, num_cells: int = 0):
        """
        初始化棋盘

        Args:
            num_cells: 预先创建的空格子数量
        """
        self.cells: List[Cell] = []

        for _ in range(num_cells):
            self.add_cell(Cell())

    # ------------------------------------------------------------------
    # 格子管理
    # ------------------------------------------------------------------

    def add_cell(self, cell: Cell) -> bool:
        """在末尾添加一个格子"""
        self.cells.append(cell)
        return True

    def get_num_cells(self) -> int:
        """格子数量"""
        return len(self.cells)

    def get_cell_state(self, index: int) -> str:
        """获取指定格子的状态"""
        return self.cells[index].state

    def set_cell_state(self, index: int, state: str) -> bool:
        """设置指定格子的状态，状态无效时返回False"""
        return self.cells[index].set_state(state)

    def set_cell(self, index: int, cell: Cell) -> bool:
        """替换指定位置的格子"""
        self.cells[index] = cell
        return True

    @property
    def states(self) -> List[str]:
        """所有格子的状态"""
        return [cell.state for cell in self.cells]

    def get_contours(self) -> List[Contour]:
        """所有格子的轮廓"""
        return [cell.contour for cell in self.cells]

    def mask_image(self, src: np.ndarray) -> np.ndarray:
        """返回只保留全部格子区域的图像"""
        return mask_image(src, self.get_contours())

    # ------------------------------------------------------------------
    # 整体操作
    # ------------------------------------------------------------------

    def reset_cell_states(self) -> bool:
        """
        清空所有格子的状态和像素计数，保留轮廓

        Returns:
            棋盘没有格子时返回False
        """
        if self.get_num_cells() == 0:
            return False

        for cell in self.cells:
            cell.reset_state()

        return True

    def reset_cells(self) -> bool:
        """
        清空所有格子的状态、像素计数和轮廓

        Returns:
            棋盘没有格子时返回False
        """
        if self.get_num_cells() == 0:
            return False

        for cell in self.cells:
            cell.reset_cell()

        return True

    def reset_board(self) -> bool:
        """移除所有格子"""
        self.cells.clear()
        return True

    def compute_state(self) -> bool:
        """
        根据像素计数重新推导每个格子的状态

        Returns:
            棋盘没有格子时返回False
        """
        if self.get_num_cells() == 0:
            return False

        for cell in self.cells:
            cell.compute_state()

        return True

    def is_full(self) -> bool:
        """没有空格子时为True，没有格子的棋盘也为True"""
        return all(cell.state != COL_EMPTY for cell in self.cells)

    def is_empty(self) -> bool:
        """没有红色或蓝色格子时为True，没有格子的棋盘也为True"""
        return all(cell.state not in (COL_RED, COL_BLUE) for cell in self.cells)

    def copy(self) -> 'Board':
        """深拷贝棋盘"""
        board = Board()
        for cell in self.cells:
            board.add_cell(cell.copy())
        return board

    # ------------------------------------------------------------------
    # 外部消息转换
    # ------------------------------------------------------------------

    def from_message(self, message: BoardMessage) -> None:
        """
        用外部消息重建棋盘

        无效的状态标记会被记录并跳过，因此棋盘格子数可能少于消息长度。
        红色和蓝色格子带有1个像素的计数，保证格子自身一致。
        """
        self.reset_board()

        for token in message.cells:
            if token == COL_RED:
                self.add_cell(Cell(state=COL_RED, red_area=1, blue_area=0))
            elif token == COL_BLUE:
                self.add_cell(Cell(state=COL_BLUE, red_area=0, blue_area=1))
            elif token == COL_EMPTY:
                self.add_cell(Cell(state=COL_EMPTY))
            else:
                logger.warning(f"棋盘消息中的格子状态 {token!r} 无效，已跳过")

    def to_message(self) -> BoardMessage:
        """
        转换为外部消息

        格子数量与消息长度不一致时，全部格子输出为空，避免错位的结果。
        """
        message = BoardMessage()

        if self.get_num_cells() != BoardMessage.NUM_CELLS:
            logger.warning(
                f"棋盘格子数 [{self.get_num_cells()}] 与消息格子数 "
                f"[{BoardMessage.NUM_CELLS}] 不一致"
            )
            message.cells = [COL_EMPTY] * BoardMessage.NUM_CELLS
            return message

        message.cells = self.states
        return message

    # ------------------------------------------------------------------
    # 容器协议
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        if len(self.cells) != len(other.cells):
            return False
        return all(a == b for a, b in zip(self.cells, other.cells))

    __hash__ = None

    def __str__(self) -> str:
        return "\t".join(self.states)

    def __repr__(self) -> str:
        return f"Board({self.states})"
