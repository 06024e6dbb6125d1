"""
棋盘分割模块

提供从二值图像到有序格子轮廓的完整几何流程：
- 棋盘外边界和内部区域定位
- 格子轮廓提取
- 行优先排序
"""

from .geometry import (
    Contour,
    as_contour,
    binarize,
    contour_area,
    contour_centroid,
    empty_contour,
    find_contours,
    mask_image,
    rank_by_area,
    render_contour,
)
from .board_locator import BoardLocator, BoardRegion
from .cell_segmenter import CellCandidate, CellSegmenter
from .grid_orderer import (
    GridOrderer,
    OrderingStrategy,
    RowBucketStrategy,
    ScanOrderStrategy,
    create_ordering_strategy,
)

__all__ = [
    'Contour',
    'as_contour',
    'binarize',
    'contour_area',
    'contour_centroid',
    'empty_contour',
    'find_contours',
    'mask_image',
    'rank_by_area',
    'render_contour',
    'BoardLocator',
    'BoardRegion',
    'CellCandidate',
    'CellSegmenter',
    'GridOrderer',
    'OrderingStrategy',
    'RowBucketStrategy',
    'ScanOrderStrategy',
    'create_ordering_strategy',
]
