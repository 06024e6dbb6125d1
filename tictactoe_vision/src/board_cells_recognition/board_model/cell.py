"""
棋盘格子

格子由轮廓、状态以及红/蓝两种颜色的像素计数组成。
状态与像素计数始终保持一致：
- 红色格子的红色像素数不少于蓝色像素数，蓝色同理
- 空格子的两种像素计数都为0
"""

import logging
from typing import Optional, Sequence, Tuple

import numpy as np

from ..core.interfaces import COL_BLUE, COL_EMPTY, COL_RED, VALID_STATES, DataValidationError
from ..segmentation.geometry import (
    Contour,
    as_contour,
    contour_area,
    contour_centroid,
    empty_contour,
    mask_image,
)


logger = logging.getLogger(__name__)


class Cell:
    """
    棋盘格子

    两个格子只要状态相同即视为相等，轮廓和像素计数不参与比较。
    """

    def __init__(self,
                 contour: Optional[Sequence] = None,
                 state: Optional[str] = None,
                 red_area: int = 0,
                 blue_area: int = 0):
        """
        初始化格子

        Args:
            contour: 格子轮廓，None 表示尚无几何信息
            state: 初始状态 (empty, red, blue)；为None时由像素计数推导，
                显式给出时与 set_state 的效果相同 (empty 会清空像素计数)
            red_area: 红色像素数
            blue_area: 蓝色像素数

        Raises:
            DataValidationError: 状态无效或像素计数为负时抛出
        """
        self.contour: Contour = as_contour(contour)
        self._state = COL_EMPTY
        self._red_area = 0
        self._blue_area = 0

        self.set_evidence(red_area, blue_area)

        if state is None:
            self.compute_state()
        elif not self.set_state(state):
            raise DataValidationError(f"无效的格子状态: {state}")

    # ------------------------------------------------------------------
    # 状态
    # ------------------------------------------------------------------

    @property
    def state(self) -> str:
        """当前状态"""
        return self._state

    def reset_state(self) -> bool:
        """清空状态和像素计数"""
        self._state = COL_EMPTY
        self._red_area = 0
        self._blue_area = 0
        return True

    def reset_cell(self) -> bool:
        """清空状态、像素计数和轮廓"""
        self.reset_state()
        self.contour = empty_contour()
        return True

    def set_state(self, state: str) -> bool:
        """
        显式设置格子状态

        为保持一致性，设置为红色时若红色像素数不占优，
        会把红色像素数调整为蓝色像素数加一；蓝色同理。

        Args:
            state: 目标状态

        Returns:
            状态是否有效
        """
        if state not in VALID_STATES:
            logger.warning(f"格子状态 {state} 无效，可选: {VALID_STATES}")
            return False

        if state == COL_EMPTY:
            return self.reset_state()

        # 计数相等时同样调整，使显式设置的状态严格占优
        if state == COL_RED and self._red_area <= self._blue_area:
            self._red_area = self._blue_area + 1
        elif state == COL_BLUE and self._blue_area <= self._red_area:
            self._blue_area = self._red_area + 1

        self._state = state
        return True

    def compute_state(self) -> bool:
        """
        根据当前像素计数推导状态

        两种计数都为0时格子为空并返回False；否则计数多的颜色胜出，
        相等时判为红色，返回True。像素计数本身不会被修改。
        """
        if self._red_area or self._blue_area:
            # TODO: 计数相等时目前判为红色，是否应视为不确定 (空) 仍待确认
            self._state = COL_RED if self._red_area >= self._blue_area else COL_BLUE
            return True

        self._state = COL_EMPTY
        return False

    # ------------------------------------------------------------------
    # 像素计数
    # ------------------------------------------------------------------

    @property
    def red_area(self) -> int:
        """红色像素数"""
        return self._red_area

    @red_area.setter
    def red_area(self, value: int) -> None:
        self._red_area = self._validate_area(value, "red_area")

    @property
    def blue_area(self) -> int:
        """蓝色像素数"""
        return self._blue_area

    @blue_area.setter
    def blue_area(self, value: int) -> None:
        self._blue_area = self._validate_area(value, "blue_area")

    def set_evidence(self, red_area: int, blue_area: int) -> None:
        """同时设置两种颜色的像素数"""
        red_area = self._validate_area(red_area, "red_area")
        blue_area = self._validate_area(blue_area, "blue_area")
        self._red_area = red_area
        self._blue_area = blue_area

    @staticmethod
    def _validate_area(value, name: str) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise DataValidationError(f"{name} 必须是整数，当前值: {value!r}")
        if value < 0:
            raise DataValidationError(f"{name} 不能为负数，当前值: {value}")
        return int(value)

    # ------------------------------------------------------------------
    # 几何信息
    # ------------------------------------------------------------------

    @property
    def centroid(self) -> Tuple[int, int]:
        """轮廓质心，空轮廓为 (0, 0)"""
        return contour_centroid(self.contour)

    @property
    def area(self) -> float:
        """轮廓面积，空轮廓为0"""
        return contour_area(self.contour)

    def mask_image(self, src: np.ndarray) -> np.ndarray:
        """返回只保留本格子区域的图像"""
        return mask_image(src, [self.contour])

    def copy(self) -> 'Cell':
        """复制格子"""
        cell = Cell(self.contour.copy())
        cell._state = self._state
        cell._red_area = self._red_area
        cell._blue_area = self._blue_area
        return cell

    # ------------------------------------------------------------------
    # 比较与显示
    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self._state == other._state

    __hash__ = None

    def __repr__(self) -> str:
        return (f"Cell(state={self._state!r}, red_area={self._red_area}, "
                f"blue_area={self._blue_area}, points={len(self.contour)})")

    def __str__(self) -> str:
        parts = [
            f"State: {self._state}",
            f"Red  Area: {self._red_area}",
            f"Blue Area: {self._blue_area}",
        ]

        if len(self.contour) == 0:
            parts.append("Points: NONE;")
        else:
            points = "\t".join(f"[{x}  {y}]" for x, y in self.contour.reshape(-1, 2))
            parts.append(f"Points:\t{points}")

        return "\t".join(parts)
