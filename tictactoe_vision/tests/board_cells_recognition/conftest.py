"""
测试公共夹具

用numpy切片绘制合成的棋盘图像：
黑色桌面上一张白纸，白纸中央是黑色的网格区域，网格区域内是白色格子。
"""

from typing import List, Tuple

import numpy as np
import pytest

from tictactoe_vision.src.board_cells_recognition.segmentation import CellCandidate, as_contour

CELL_SIZE = 60
CELL_GAP = 10
GRID_OFFSET = 40
PAPER_MARGIN = 20


def draw_board(side: int = 3, with_noise: bool = True) -> np.ndarray:
    """绘制 side x side 的合成棋盘二值图像"""
    grid_end = GRID_OFFSET + side * (CELL_SIZE + CELL_GAP) + CELL_GAP
    paper_end = grid_end + PAPER_MARGIN
    size = paper_end + PAPER_MARGIN

    image = np.zeros((size, size), dtype=np.uint8)
    image[PAPER_MARGIN:paper_end, PAPER_MARGIN:paper_end] = 255
    image[GRID_OFFSET:grid_end, GRID_OFFSET:grid_end] = 0

    for row in range(side):
        for col in range(side):
            y0, x0 = cell_origin(row, col)
            image[y0:y0 + CELL_SIZE, x0:x0 + CELL_SIZE] = 255

    if with_noise:
        # 白纸之外的小块噪声
        image[2:10, 2:10] = 255

    return image


def cell_origin(row: int, col: int) -> Tuple[int, int]:
    """格子左上角坐标 (y, x)"""
    return (GRID_OFFSET + CELL_GAP + row * (CELL_SIZE + CELL_GAP),
            GRID_OFFSET + CELL_GAP + col * (CELL_SIZE + CELL_GAP))


def cell_center(row: int, col: int) -> Tuple[int, int]:
    """格子中心坐标 (x, y)"""
    y0, x0 = cell_origin(row, col)
    return x0 + CELL_SIZE // 2, y0 + CELL_SIZE // 2


def square_candidate(cx: int, cy: int, scan_index: int, half: int = 40) -> CellCandidate:
    """以 (cx, cy) 为中心的方形候选格子"""
    contour = as_contour([
        (cx - half, cy - half),
        (cx + half, cy - half),
        (cx + half, cy + half),
        (cx - half, cy + half),
    ])
    return CellCandidate(
        contour=contour,
        centroid=(cx, cy),
        area=float((2 * half) ** 2),
        scan_index=scan_index,
    )


def grid_candidates(raster: bool = True) -> List[CellCandidate]:
    """
    质心位于 {0,100,200} x {0,100,200} 的9个候选格子

    raster=True 时按逐行扫描顺序 (左上角在前) 排列，
    否则按轮廓提取的输出顺序 (右下角在前) 排列。
    """
    points = [(x, y) for y in (0, 100, 200) for x in (0, 100, 200)]
    if not raster:
        points = list(reversed(points))
    return [square_candidate(x, y, i) for i, (x, y) in enumerate(points)]


@pytest.fixture
def board_image() -> np.ndarray:
    """3x3 合成棋盘"""
    return draw_board(3)
