"""
棋盘测试

测试棋盘整体操作以及与外部棋盘消息之间的转换。
"""

from datetime import datetime

import numpy as np
import pytest

from tictactoe_vision.src.board_cells_recognition.board_model import Board, BoardMessage, Cell
from tictactoe_vision.src.board_cells_recognition.core.interfaces import (
    COL_BLUE,
    COL_EMPTY,
    COL_RED,
)

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10)]


def make_board(states):
    """按给定状态创建带轮廓的棋盘"""
    board = Board()
    for i, state in enumerate(states):
        offset = 20 * i
        contour = [(x + offset, y) for x, y in SQUARE]
        board.add_cell(Cell(contour))
        board.set_cell_state(i, state)
    return board


class TestEmptyBoard:
    """测试没有格子的棋盘"""

    def setup_method(self):
        self.board = Board()

    def test_vacuous_truth(self):
        assert self.board.get_num_cells() == 0
        assert self.board.is_full() is True
        assert self.board.is_empty() is True

    def test_bulk_operations_fail(self):
        assert self.board.reset_cell_states() is False
        assert self.board.reset_cells() is False
        assert self.board.compute_state() is False

    def test_reset_board_is_idempotent(self):
        assert self.board.reset_board() is True
        assert self.board.reset_board() is True
        assert len(self.board) == 0

    def test_preallocated_cells(self):
        board = Board(9)

        assert board.get_num_cells() == 9
        assert board.states == [COL_EMPTY] * 9


class TestBoardOperations:
    """测试棋盘整体操作"""

    def setup_method(self):
        self.board = make_board([COL_RED, COL_EMPTY, COL_BLUE])

    def test_cell_access(self):
        assert self.board.get_cell_state(0) == COL_RED
        assert self.board.get_cell_state(2) == COL_BLUE
        assert self.board[1].state == COL_EMPTY
        assert [cell.state for cell in self.board] == [COL_RED, COL_EMPTY, COL_BLUE]

    def test_set_invalid_cell_state(self):
        assert self.board.set_cell_state(1, "green") is False
        assert self.board.get_cell_state(1) == COL_EMPTY

    def test_set_cell(self):
        assert self.board.set_cell(1, Cell(state=COL_BLUE, blue_area=2)) is True
        assert self.board.states == [COL_RED, COL_BLUE, COL_BLUE]

    def test_full_and_empty(self):
        assert self.board.is_full() is False
        assert self.board.is_empty() is False

        self.board.set_cell_state(1, COL_RED)
        assert self.board.is_full() is True

        self.board.reset_cell_states()
        assert self.board.is_empty() is True

    def test_reset_cell_states_keeps_contours(self):
        assert self.board.reset_cell_states() is True

        assert self.board.states == [COL_EMPTY] * 3
        assert all(len(contour) == 4 for contour in self.board.get_contours())
        assert all(cell.red_area == 0 and cell.blue_area == 0 for cell in self.board)

    def test_reset_cells_clears_contours(self):
        assert self.board.reset_cells() is True

        assert self.board.get_num_cells() == 3
        assert all(len(contour) == 0 for contour in self.board.get_contours())

    def test_reset_board(self):
        self.board.reset_board()

        assert self.board.get_num_cells() == 0

    def test_compute_state(self):
        self.board[0].set_evidence(0, 6)
        self.board[1].set_evidence(3, 3)
        self.board[2].set_evidence(0, 0)

        assert self.board.compute_state() is True
        assert self.board.states == [COL_BLUE, COL_RED, COL_EMPTY]

    def test_mask_image(self):
        src = np.full((20, 80), 255, dtype=np.uint8)

        masked = self.board.mask_image(src)

        assert masked[5, 5] == 255
        assert masked[5, 15] == 0
        assert masked[5, 45] == 255

    def test_copy_is_deep(self):
        clone = self.board.copy()
        clone.set_cell_state(1, COL_BLUE)
        clone[0].contour[0, 0] = [99, 99]

        assert self.board.get_cell_state(1) == COL_EMPTY
        assert self.board[0].contour[0, 0].tolist() == [0, 0]

    def test_string_representation(self):
        assert str(self.board) == "red\tempty\tblue"
        assert "red" in repr(self.board)


class TestBoardEquality:
    """测试棋盘比较"""

    def test_same_states_are_equal(self):
        a = make_board([COL_RED, COL_EMPTY, COL_BLUE])
        b = Board()
        b.add_cell(Cell(state=COL_RED, red_area=1))
        b.add_cell(Cell())
        b.add_cell(Cell(state=COL_BLUE, blue_area=1))

        assert a == b

    def test_single_difference(self):
        a = make_board([COL_RED, COL_EMPTY, COL_BLUE])
        b = make_board([COL_RED, COL_EMPTY, COL_BLUE])
        b.set_cell_state(1, COL_RED)

        assert a != b

    def test_different_length(self):
        assert make_board([COL_RED]) != make_board([COL_RED, COL_EMPTY])

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(Board())


class TestBoardMessage:
    """测试外部棋盘消息"""

    def test_default_message(self):
        message = BoardMessage()

        assert message.cells == [COL_EMPTY] * 9
        assert isinstance(message.timestamp, datetime)

    def test_invalid_length(self):
        with pytest.raises(ValueError):
            BoardMessage(cells=[COL_EMPTY] * 8)

    def test_dict_conversion(self):
        cells = [COL_RED, COL_EMPTY, COL_BLUE] * 3
        message = BoardMessage(cells=cells)

        data = message.to_dict()
        restored = BoardMessage.from_dict(data)

        assert data['cells'] == cells
        assert restored.cells == cells
        assert restored.timestamp == message.timestamp

    def test_from_dict_without_timestamp(self):
        message = BoardMessage.from_dict({'cells': [COL_EMPTY] * 9})

        assert isinstance(message.timestamp, datetime)


class TestMessageConversion:
    """测试棋盘与消息之间的转换"""

    def test_round_trip(self):
        cells = [COL_RED, COL_EMPTY, COL_BLUE,
                 COL_EMPTY, COL_RED, COL_EMPTY,
                 COL_BLUE, COL_EMPTY, COL_RED]
        board = Board()

        board.from_message(BoardMessage(cells=cells))

        assert board.get_num_cells() == 9
        assert board.to_message().cells == cells

    def test_imported_cells_are_consistent(self):
        """导入的格子重新推导状态后保持不变"""
        board = Board()
        board.from_message(BoardMessage(cells=[COL_RED, COL_BLUE] + [COL_EMPTY] * 7))

        assert board[0].red_area == 1 and board[0].blue_area == 0
        assert board[1].red_area == 0 and board[1].blue_area == 1
        assert all(len(cell.contour) == 0 for cell in board)

        board.compute_state()
        assert board.states[:2] == [COL_RED, COL_BLUE]

    def test_import_replaces_existing_cells(self):
        board = make_board([COL_BLUE] * 4)

        board.from_message(BoardMessage())

        assert board.states == [COL_EMPTY] * 9

    def test_invalid_token_is_skipped(self):
        cells = [COL_RED, "green"] + [COL_EMPTY] * 7
        board = Board()

        board.from_message(BoardMessage(cells=cells))

        assert board.get_num_cells() == 8
        assert board.get_cell_state(0) == COL_RED

    def test_export_with_mismatched_size(self):
        board = make_board([COL_RED, COL_BLUE, COL_RED])

        message = board.to_message()

        assert message.cells == [COL_EMPTY] * 9

    def test_export_empty_board(self):
        assert Board().to_message().cells == [COL_EMPTY] * 9
