"""
棋盘定位器

通过两级"最大面积"筛选，从二值图像中分离出棋盘外边界和内部落子区域。
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..core.interfaces import InsufficientContoursError
from ..core.logger import LoggerMixin
from .geometry import Contour, contour_area, find_contours, rank_by_area, render_contour


@dataclass
class BoardRegion:
    """棋盘定位结果"""
    outer_contour: Contour
    inner_contour: Contour
    inner_mask: np.ndarray  # 只包含内部区域(及其嵌套结构)的掩码

    @property
    def inner_area(self) -> float:
        """内部区域面积"""
        return contour_area(self.inner_contour)


class BoardLocator(LoggerMixin):
    """
    棋盘定位器

    第一级：面积最大的轮廓视为棋盘外边界，单独绘制到空白画布上以屏蔽其他噪声；
    第二级：在该画布上重新提取轮廓，面积最大的是外边界自身，
    面积第二大的才是内部落子区域的边界。
    """

    REQUIRED_CONTOURS = 2

    def __init__(self):
        self.last_region: Optional[BoardRegion] = None

    def locate(self, binary: np.ndarray) -> BoardRegion:
        """
        定位棋盘内部区域

        Args:
            binary: 棋盘为前景的二值图像

        Returns:
            棋盘定位结果

        Raises:
            InsufficientContoursError: 任一阶段轮廓数量少于2时抛出，
                此时 last_region 保持上一次的有效结果
        """
        contours, hierarchy = find_contours(binary)
        self._check_count("outer_board", len(contours))

        outer_index = rank_by_area(contours)[0]
        outer_contour = contours[outer_index]
        outer_board = render_contour(binary.shape, contours, outer_index, hierarchy)

        contours, hierarchy = find_contours(outer_board)
        self._check_count("inner_board", len(contours))

        # 面积最大的是外边界自身，取第二大的
        inner_index = rank_by_area(contours)[1]
        inner_contour = contours[inner_index]
        inner_mask = render_contour(outer_board.shape, contours, inner_index, hierarchy)

        region = BoardRegion(
            outer_contour=outer_contour,
            inner_contour=inner_contour,
            inner_mask=inner_mask,
        )
        self.last_region = region

        self.logger.debug(
            f"棋盘定位完成，外边界面积: {contour_area(outer_contour):.0f}, "
            f"内部区域面积: {region.inner_area:.0f}"
        )
        return region

    def _check_count(self, stage: str, found: int) -> None:
        if found < self.REQUIRED_CONTOURS:
            self.logger.warning(f"阶段 {stage} 只找到 {found} 个轮廓，保留上一次的棋盘区域")
            raise InsufficientContoursError(stage, found, self.REQUIRED_CONTOURS)
