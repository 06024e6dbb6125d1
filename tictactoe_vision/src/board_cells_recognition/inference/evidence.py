"""
颜色证据接口

颜色像素的分类由外部组件完成，本系统只消费其给出的像素计数。
"""

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np


class ColorEvidenceProvider(ABC):
    """颜色证据提供者抽象基类"""

    @abstractmethod
    def count_colors(self, region: np.ndarray) -> Tuple[int, int]:
        """
        统计格子区域中的红色和蓝色像素

        Args:
            region: 原始彩色图像中只保留单个格子区域的图像

        Returns:
            (红色像素数, 蓝色像素数)，均为非负整数
        """
        pass
