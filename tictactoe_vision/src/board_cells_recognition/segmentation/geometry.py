"""
几何工具

对OpenCV轮廓相关能力的薄封装：二值化、轮廓提取、矩计算和填充绘制。
系统中所有几何计算都经过这里，保证空轮廓和零面积轮廓不会触发除零。
"""

import logging
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from ..core.interfaces import DEFAULT_THRESHOLD, DEFAULT_MAX_VALUE, DataValidationError


logger = logging.getLogger(__name__)

Contour = np.ndarray


def empty_contour() -> Contour:
    """返回一个不含任何点的轮廓"""
    return np.zeros((0, 1, 2), dtype=np.int32)


def as_contour(points: Optional[Sequence]) -> Contour:
    """
    将点序列规范化为OpenCV轮廓格式

    Args:
        points: (x, y) 点序列、(N, 2) 或 (N, 1, 2) 数组，None 表示空轮廓

    Returns:
        形状为 (N, 1, 2)、类型为 int32 的数组
    """
    if points is None:
        return empty_contour()

    array = np.asarray(points)
    if array.size == 0:
        return empty_contour()

    return array.astype(np.int32).reshape(-1, 1, 2)


def binarize(image: np.ndarray,
             threshold: float = DEFAULT_THRESHOLD,
             max_value: float = DEFAULT_MAX_VALUE) -> np.ndarray:
    """
    将图像转换为二值图像，白色棋盘为前景

    已经是二值的单通道图像 (bool，或只含 0/1 的数值图像) 直接把前景放大到
    max_value，不再按阈值处理；其余图像先转为灰度再按阈值二值化。

    Args:
        image: BGR/BGRA彩色图像、灰度图像或二值图像
        threshold: 二值化阈值
        max_value: 前景像素值

    Returns:
        单通道 uint8 二值图像

    Raises:
        DataValidationError: 图像为空或通道数不受支持时抛出
    """
    gray = _to_gray(image)

    if _is_binary(gray):
        return (gray > 0).astype(np.uint8) * np.uint8(max_value)

    if gray.dtype != np.uint8:
        gray = np.clip(gray, 0, 255).astype(np.uint8)

    _, binary = cv2.threshold(gray, threshold, max_value, cv2.THRESH_BINARY)
    return binary


def _is_binary(gray: np.ndarray) -> bool:
    if gray.dtype == np.bool_:
        return True
    if gray.min() < 0 or gray.max() > 1:
        return False
    return bool(np.all((gray == 0) | (gray == 1)))


def _to_gray(image: np.ndarray) -> np.ndarray:
    if not isinstance(image, np.ndarray) or image.size == 0:
        raise DataValidationError("输入帧为空或不是图像数组")

    if image.ndim == 2:
        return image

    if image.ndim == 3:
        channels = image.shape[2]
        if channels == 1:
            return np.ascontiguousarray(image[:, :, 0])
        if channels in (3, 4):
            if image.dtype == np.bool_:
                image = image.astype(np.uint8)
            elif image.dtype != np.uint8:
                image = np.clip(image, 0, 255).astype(np.uint8)
            code = cv2.COLOR_BGR2GRAY if channels == 3 else cv2.COLOR_BGRA2GRAY
            return cv2.cvtColor(image, code)

    raise DataValidationError(f"不支持的图像形状: {image.shape}")


def find_contours(binary: np.ndarray) -> Tuple[List[Contour], Optional[np.ndarray]]:
    """
    提取二值图像中的全部轮廓及其嵌套层级

    Args:
        binary: 单通道二值图像

    Returns:
        (轮廓列表, 层级数组)，没有轮廓时层级为None
    """
    contours, hierarchy = cv2.findContours(
        binary.copy(), cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE
    )
    return list(contours), hierarchy


def _moments(contour: Contour) -> Optional[dict]:
    if contour is None or len(contour) == 0:
        return None
    return cv2.moments(as_contour(contour), False)


def contour_area(contour: Contour) -> float:
    """
    计算轮廓面积 (零阶矩)

    空轮廓返回0。
    """
    moments = _moments(contour)
    if moments is None:
        return 0.0
    return abs(moments['m00'])


def contour_centroid(contour: Contour) -> Tuple[int, int]:
    """
    计算轮廓质心 (一阶矩 / 零阶矩)

    空轮廓或零面积轮廓返回 (0, 0)。
    """
    moments = _moments(contour)
    if moments is None or moments['m00'] == 0:
        logger.debug("退化轮廓，质心按 (0, 0) 处理")
        return 0, 0

    return int(moments['m10'] / moments['m00']), int(moments['m01'] / moments['m00'])


def rank_by_area(contours: Sequence[Contour]) -> List[int]:
    """按面积从大到小返回轮廓索引"""
    areas = [contour_area(contour) for contour in contours]
    return sorted(range(len(contours)), key=lambda i: areas[i], reverse=True)


def render_contour(shape: Tuple[int, ...],
                   contours: Sequence[Contour],
                   index: int,
                   hierarchy: Optional[np.ndarray] = None) -> np.ndarray:
    """
    在全黑画布上填充绘制单个轮廓

    提供层级信息时，嵌套在该轮廓内的子轮廓一并绘制，
    从而保留内部结构；画布上其余检测结果全部被屏蔽。

    Args:
        shape: 画布尺寸，取前两维
        contours: 轮廓列表
        index: 要绘制的轮廓索引
        hierarchy: find_contours 返回的层级数组

    Returns:
        单通道掩码图像
    """
    canvas = np.zeros(shape[:2], dtype=np.uint8)

    if hierarchy is not None:
        cv2.drawContours(canvas, list(contours), index, 255, cv2.FILLED,
                         cv2.LINE_8, hierarchy)
    else:
        cv2.drawContours(canvas, list(contours), index, 255, cv2.FILLED)

    return canvas


def mask_image(src: np.ndarray, contours: Sequence[Contour]) -> np.ndarray:
    """
    只保留轮廓内部区域的图像

    Args:
        src: 原始图像
        contours: 轮廓列表，空轮廓会被忽略

    Returns:
        与原图同尺寸的图像，轮廓外部为0
    """
    mask = np.zeros(src.shape[:2], dtype=np.uint8)
    valid = [as_contour(contour) for contour in contours if len(contour) > 0]
    if valid:
        cv2.drawContours(mask, valid, -1, 255, cv2.FILLED)

    cropped = np.zeros_like(src)
    cropped[mask > 0] = src[mask > 0]
    return cropped
