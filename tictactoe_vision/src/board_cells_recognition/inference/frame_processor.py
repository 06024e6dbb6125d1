"""
逐帧处理器

把一帧图像依次送入 定位 -> 分割 -> 排序 -> 更新格子 -> 推导状态 的流程。
每一帧要么完整提交到持久棋盘，要么整体放弃，棋盘保持上一次的有效状态。
"""

import time
from typing import Any, Dict, List, Optional

import numpy as np

from ..board_model import Board, Cell
from ..core.config import ConfigManager
from ..core.interfaces import (
    BoardRecognitionError,
    BoardSnapshot,
    CellCountMismatchError,
    ConfigurationError,
    DataValidationError,
    FrameResult,
)
from ..core.logger import LoggerMixin
from ..segmentation import (
    BoardLocator,
    CellSegmenter,
    Contour,
    GridOrderer,
    OrderingStrategy,
    binarize,
    create_ordering_strategy,
)
from .evidence import ColorEvidenceProvider


class FrameProcessor(LoggerMixin):
    """
    逐帧处理器

    单线程、逐帧同步使用：调用方在自己的循环中对每一帧调用 process_frame，
    持久棋盘是帧与帧之间唯一保留的状态。
    """

    def __init__(self,
                 config: Optional[Dict[str, Any]] = None,
                 ordering_strategy: Optional[OrderingStrategy] = None,
                 evidence_provider: Optional[ColorEvidenceProvider] = None):
        """
        初始化处理器

        Args:
            config: 配置字典，与默认配置合并
            ordering_strategy: 格子排序策略，None 时按配置创建
            evidence_provider: 颜色证据提供者，None 时不更新像素计数

        Raises:
            ConfigurationError: 配置无效时抛出
        """
        manager = ConfigManager()
        if config:
            manager.update(config)
        if not manager.validate_config(manager.config):
            raise ConfigurationError("处理器配置验证失败")

        self.config = manager.config
        self.threshold = self.config['preprocessing']['threshold']
        self.max_value = self.config['preprocessing']['max_value']
        self.redetect_on_count_change = self.config['board']['redetect_on_count_change']

        if ordering_strategy is None:
            ordering_strategy = create_ordering_strategy(
                self.config['ordering']['strategy'],
                row_tolerance=self.config['ordering']['row_tolerance'],
            )

        self.locator = BoardLocator()
        self.segmenter = CellSegmenter()
        self.orderer = GridOrderer(ordering_strategy)
        self.evidence_provider = evidence_provider

        self._board = Board()
        self._redetect_requested = False
        self._frame_index = 0
        self._stats = {
            'frames_processed': 0,
            'frames_failed': 0,
            'last_error': None,
            'total_processing_time': 0.0,
        }
        self._last_snapshot = self._make_snapshot()

        self.logger.info(f"逐帧处理器初始化完成，排序策略: {ordering_strategy.name}")

    @property
    def board(self) -> Board:
        """当前棋盘的副本"""
        return self._board.copy()

    @property
    def last_snapshot(self) -> BoardSnapshot:
        """最近一次成功处理后的快照"""
        return self._last_snapshot

    def request_redetection(self) -> None:
        """下一帧重新建立棋盘格子"""
        self._redetect_requested = True
        self.logger.info("已请求重新检测棋盘")

    def reset(self) -> None:
        """清空棋盘，下一帧重新建立"""
        self._board.reset_board()
        self._redetect_requested = False
        self._last_snapshot = self._make_snapshot()

    def process_frame(self,
                      image: np.ndarray,
                      color_image: Optional[np.ndarray] = None) -> FrameResult:
        """
        处理一帧图像

        Args:
            image: 二值图像或待二值化的原始图像
            color_image: 原始彩色图像，用于统计格子内的颜色像素

        Returns:
            处理结果。失败时 snapshot 为上一次成功处理后的快照
        """
        start_time = time.time()
        self._frame_index += 1

        try:
            staged = self._run_pipeline(image, color_image)
        except BoardRecognitionError as e:
            elapsed = (time.time() - start_time) * 1000
            self._stats['frames_failed'] += 1
            self._stats['last_error'] = str(e)
            self.logger.warning(f"第 {self._frame_index} 帧处理失败，保留上一次的棋盘状态: {e}")
            return FrameResult(
                success=False,
                snapshot=self._last_snapshot,
                error=str(e),
                processing_time=elapsed,
            )

        self._board = staged
        self._redetect_requested = False
        self._last_snapshot = self._make_snapshot()

        elapsed = (time.time() - start_time) * 1000
        self._stats['frames_processed'] += 1
        self._stats['total_processing_time'] += elapsed

        self.logger.debug(f"第 {self._frame_index} 帧处理完成: {self._board}")
        return FrameResult(success=True, snapshot=self._last_snapshot, processing_time=elapsed)

    def get_stats(self) -> Dict[str, Any]:
        """获取处理统计信息"""
        processed = self._stats['frames_processed']
        return {
            'frames_processed': processed,
            'frames_failed': self._stats['frames_failed'],
            'last_error': self._stats['last_error'],
            'average_processing_time': (
                self._stats['total_processing_time'] / processed if processed else 0.0
            ),
            'num_cells': self._board.get_num_cells(),
        }

    def _run_pipeline(self, image: np.ndarray, color_image: Optional[np.ndarray]) -> Board:
        if color_image is not None and color_image.shape[:2] != np.shape(image)[:2]:
            raise DataValidationError(
                f"彩色图像尺寸 {color_image.shape[:2]} 与输入帧尺寸 {np.shape(image)[:2]} 不一致"
            )

        binary = binarize(image, self.threshold, self.max_value)
        region = self.locator.locate(binary)
        candidates = self.segmenter.segment(region.inner_mask)
        contours = self.orderer.ordered_contours(candidates)

        staged = self._stage_board(contours)

        if self.evidence_provider is not None and color_image is not None:
            for cell in staged:
                red_area, blue_area = self.evidence_provider.count_colors(cell.mask_image(color_image))
                cell.set_evidence(red_area, blue_area)

        staged.compute_state()
        return staged

    def _stage_board(self, contours: List[Contour]) -> Board:
        """在棋盘副本上应用本帧的几何结果"""
        num_cells = self._board.get_num_cells()

        if self._redetect_requested or num_cells == 0:
            return self._populate(contours)

        if len(contours) != num_cells:
            if not self.redetect_on_count_change:
                raise CellCountMismatchError(num_cells, len(contours))
            self.logger.warning(f"格子数量由 {num_cells} 变为 {len(contours)}，重新建立棋盘")
            return self._populate(contours)

        staged = self._board.copy()
        for cell, contour in zip(staged, contours):
            cell.contour = contour
        return staged

    def _populate(self, contours: List[Contour]) -> Board:
        board = Board()
        for contour in contours:
            board.add_cell(Cell(contour))

        self.logger.info(f"建立棋盘，共 {board.get_num_cells()} 个格子")
        return board

    def _make_snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(
            states=tuple(self._board.states),
            centroids=tuple(cell.centroid for cell in self._board),
            is_full=self._board.is_full(),
            is_empty=self._board.is_empty(),
            frame_index=self._frame_index,
        )
