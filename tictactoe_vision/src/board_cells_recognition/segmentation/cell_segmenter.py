"""
格子分割器

在棋盘内部区域中提取每个格子的轮廓及其质心。
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from ..core.interfaces import InsufficientContoursError
from ..core.logger import LoggerMixin
from .geometry import Contour, contour_area, contour_centroid, find_contours, rank_by_area


@dataclass
class CellCandidate:
    """候选格子"""
    contour: Contour
    centroid: Tuple[int, int]
    area: float
    scan_index: int  # 轮廓提取时的原始顺序

    @classmethod
    def from_contour(cls, contour: Contour, scan_index: int) -> 'CellCandidate':
        """由轮廓创建候选格子"""
        return cls(
            contour=contour,
            centroid=contour_centroid(contour),
            area=contour_area(contour),
            scan_index=scan_index,
        )


class CellSegmenter(LoggerMixin):
    """格子分割器"""

    def segment(self, inner_mask: np.ndarray) -> List[CellCandidate]:
        """
        从内部区域掩码中提取候选格子

        面积最大的轮廓是内部区域边界在这一层的重现，需要剔除，
        其余轮廓都视为格子。

        Args:
            inner_mask: BoardLocator 绘制的内部区域掩码

        Returns:
            按轮廓提取顺序排列的候选格子

        Raises:
            InsufficientContoursError: 剔除后没有剩余轮廓时抛出
        """
        contours, _ = find_contours(inner_mask)

        if contours:
            largest_index = rank_by_area(contours)[0]
            contours = [c for i, c in enumerate(contours) if i != largest_index]

        if not contours:
            self.logger.warning("内部区域中没有找到格子轮廓")
            raise InsufficientContoursError("cells", 0, 1)

        candidates = [CellCandidate.from_contour(contour, i) for i, contour in enumerate(contours)]

        self.logger.debug(f"分割出 {len(candidates)} 个候选格子")
        return candidates
