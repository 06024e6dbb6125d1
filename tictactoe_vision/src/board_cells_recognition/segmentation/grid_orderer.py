"""
网格排序器

轮廓提取结果没有可靠的几何顺序，这里把候选格子整理成
行优先 (从上到下、从左到右) 的确定顺序，保证棋盘中第 i 个格子
在每一帧都对应同一个物理格子。

排序方式以策略对象的形式提供：
- RowBucketStrategy: 按质心y分行，再按x排序 (默认)
- ScanOrderStrategy: 依赖轮廓提取顺序的启发式方法
"""

import math
from abc import ABC, abstractmethod
from statistics import median
from typing import Dict, List, Type

from ..core.interfaces import ConfigurationError, GridOrderingError
from ..core.logger import LoggerMixin
from .cell_segmenter import CellCandidate
from .geometry import Contour


class OrderingStrategy(ABC):
    """格子排序策略抽象基类"""

    name = ""

    @abstractmethod
    def order(self, candidates: List[CellCandidate]) -> List[CellCandidate]:
        """
        返回按行优先顺序排列的候选格子

        Raises:
            GridOrderingError: 无法得到完整的排列时抛出
        """
        pass


class ScanOrderStrategy(OrderingStrategy):
    """
    基于轮廓提取顺序的启发式排序

    最左、最右的质心通过遍历得到；"最高"的质心直接取原始顺序中的
    最后一个，这只是对最高点的近似，只有在轮廓提取顺序接近
    逐行扫描顺序时才成立，换一种轮廓顺序就可能得到错误的排列。
    """

    name = "scan_order"

    def order(self, candidates: List[CellCandidate]) -> List[CellCandidate]:
        if not candidates:
            return []

        leftmost = candidates[0].centroid
        rightmost = candidates[0].centroid
        highest = candidates[-1].centroid

        for candidate in candidates:
            if candidate.centroid[0] < leftmost[0]:
                leftmost = candidate.centroid
            if candidate.centroid[0] > rightmost[0]:
                rightmost = candidate.centroid

        # 宽棋盘：直接逆序输出
        if (rightmost[0] - highest[0]) > (highest[0] - leftmost[0]):
            return list(reversed(candidates))

        count = len(candidates)
        side = int(math.sqrt(count + 1))
        if side * side != count:
            raise GridOrderingError(
                f"{count} 个格子无法组成 {side}x{side} 的方形网格"
            )

        ordered = []
        for row in range(side, 0, -1):
            for col in range(side, 0, -1):
                ordered.append(candidates[row * side - col])

        return ordered


class RowBucketStrategy(OrderingStrategy):
    """
    按行分桶排序

    先按质心y排序，相邻质心的y差超过 row_tolerance 倍的格子边长
    就开始新的一行，每行内部再按x排序。结果与轮廓提取顺序无关。
    """

    name = "row_bucket"

    def __init__(self, row_tolerance: float = 0.5):
        if row_tolerance <= 0:
            raise ConfigurationError(f"row_tolerance 必须是正数，当前值: {row_tolerance}")
        self.row_tolerance = row_tolerance

    def order(self, candidates: List[CellCandidate]) -> List[CellCandidate]:
        if not candidates:
            return []

        by_y = sorted(candidates, key=lambda c: (c.centroid[1], c.centroid[0]))
        tolerance = self._row_gap(candidates)

        rows: List[List[CellCandidate]] = [[by_y[0]]]
        row_y = float(by_y[0].centroid[1])

        for candidate in by_y[1:]:
            if candidate.centroid[1] - row_y > tolerance:
                rows.append([candidate])
                row_y = float(candidate.centroid[1])
            else:
                rows[-1].append(candidate)
                row_y = sum(c.centroid[1] for c in rows[-1]) / len(rows[-1])

        ordered = []
        for row in rows:
            ordered.extend(sorted(row, key=lambda c: c.centroid[0]))

        return ordered

    def _row_gap(self, candidates: List[CellCandidate]) -> float:
        sides = [math.sqrt(c.area) for c in candidates if c.area > 0]
        if sides:
            return self.row_tolerance * median(sides)

        # 没有面积信息时，按质心y的跨度估算行距
        ys = [c.centroid[1] for c in candidates]
        rows = max(1, round(math.sqrt(len(candidates))) - 1)
        return self.row_tolerance * (max(ys) - min(ys)) / rows


ORDERING_STRATEGIES: Dict[str, Type[OrderingStrategy]] = {
    ScanOrderStrategy.name: ScanOrderStrategy,
    RowBucketStrategy.name: RowBucketStrategy,
}


def create_ordering_strategy(name: str, **kwargs) -> OrderingStrategy:
    """
    根据名称创建排序策略

    Args:
        name: 策略名称 (row_bucket, scan_order)
        **kwargs: 传给策略构造函数的参数，策略不接受的参数会被忽略

    Raises:
        ConfigurationError: 未知策略名称时抛出
    """
    if name not in ORDERING_STRATEGIES:
        raise ConfigurationError(
            f"未知的排序策略: {name}，可选: {sorted(ORDERING_STRATEGIES)}"
        )

    if name == RowBucketStrategy.name:
        return RowBucketStrategy(row_tolerance=kwargs.get('row_tolerance', 0.5))
    return ORDERING_STRATEGIES[name]()


class GridOrderer(LoggerMixin):
    """网格排序器，把排序工作委托给可替换的策略对象"""

    def __init__(self, strategy: OrderingStrategy = None):
        self.strategy = strategy or RowBucketStrategy()

    def order(self, candidates: List[CellCandidate]) -> List[CellCandidate]:
        """按行优先顺序排列候选格子"""
        ordered = self.strategy.order(candidates)

        if len(ordered) != len(candidates):
            raise GridOrderingError(
                f"排序策略 {self.strategy.name} 返回 {len(ordered)} 个格子，"
                f"输入为 {len(candidates)} 个"
            )

        self.logger.debug(
            f"策略 {self.strategy.name} 排序结果: {[c.scan_index for c in ordered]}"
        )
        return ordered

    def ordered_contours(self, candidates: List[CellCandidate]) -> List[Contour]:
        """按行优先顺序返回格子轮廓"""
        return [candidate.contour for candidate in self.order(candidates)]
