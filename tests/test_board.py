from __future__ import annotations

import numpy as np
import pytest

from termtris.board import Board, BoardSizeError


def _board_from_rows(rows: list[list[int]]) -> Board:
    board = Board(width=len(rows[0]), height=len(rows))
    board.grid = np.array(rows, dtype=np.uint8)
    return board


def test_new_board_is_empty() -> None:
    board = Board()
    assert board.grid.shape == (20, 10)
    assert not any(board.is_occupied(x, y) for y in range(20) for x in range(10))


def test_set_and_clear_cell() -> None:
    board = Board()
    board.set_cell(3, 7, 31)
    assert board.is_occupied(3, 7)
    assert board.color_at(3, 7) == 31
    assert board.grid[7, 3] == 31
    board.clear_cell(3, 7)
    assert not board.is_occupied(3, 7)


@pytest.mark.parametrize("x, y", [(-1, 0), (10, 0), (0, -1), (0, 20)])
def test_out_of_range_access_raises(x: int, y: int) -> None:
    board = Board()
    with pytest.raises(IndexError):
        board.is_occupied(x, y)
    with pytest.raises(IndexError):
        board.set_cell(x, y, 31)


def test_empty_colour_rejected() -> None:
    with pytest.raises(ValueError):
        Board().set_cell(0, 0, 0)


def test_row_is_full() -> None:
    board = Board(width=3, height=2)
    for x in range(3):
        board.set_cell(x, 1, 32)
    board.set_cell(0, 0, 32)
    assert board.row_is_full(1)
    assert not board.row_is_full(0)


def test_clear_full_rows_keeps_remaining_order() -> None:
    board = _board_from_rows(
        [
            [0, 0, 0],
            [1, 0, 0],
            [4, 4, 4],
            [0, 2, 0],
            [5, 5, 5],
            [0, 0, 3],
        ]
    )
    assert board.clear_full_rows() == 2
    assert board.grid.tolist() == [
        [0, 0, 0],
        [0, 0, 0],
        [0, 0, 0],
        [1, 0, 0],
        [0, 2, 0],
        [0, 0, 3],
    ]


@pytest.mark.parametrize("k", [0, 1, 2, 3, 4, 20])
def test_clear_k_full_rows_at_bottom(k: int) -> None:
    board = Board()
    for y in range(board.height - k, board.height):
        for x in range(board.width):
            board.set_cell(x, y, 36)
    marker_row = board.height - k - 1
    if marker_row >= 0:
        board.set_cell(2, marker_row, 33)

    assert board.clear_full_rows() == k
    assert board.grid.shape == (board.height, board.width)
    assert not any(board.row_is_full(y) for y in range(board.height))
    if marker_row >= 0:
        assert board.color_at(2, board.height - 1) == 33
        assert int(np.count_nonzero(board.grid)) == 1
    else:
        assert int(np.count_nonzero(board.grid)) == 0


def test_clear_without_full_rows_leaves_board_untouched() -> None:
    board = Board()
    board.set_cell(0, 19, 31)
    before = board.copy_grid()
    assert board.clear_full_rows() == 0
    assert np.array_equal(board.grid, before)


@pytest.mark.parametrize("width, height", [(0, 20), (10, 0), (-4, 4), (70000, 20), (10, 0xFFFF)])
def test_unrepresentable_dimensions_rejected(width: int, height: int) -> None:
    with pytest.raises(BoardSizeError):
        Board(width=width, height=height)
