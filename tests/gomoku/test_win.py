"""Unit tests for /src/gomoku/win.py"""

from typing import Callable

import pytest

from src.core.shared_types import Player
from src.gomoku.board import Board
from src.gomoku.square import Square
from src.gomoku.win import NO_WIN, WinResult, check_win

BoardFactory = Callable[[list[tuple[int, int]], list[tuple[int, int]]], Board]


def squares(*coords: tuple[int, int]) -> tuple[Square, ...]:
    return tuple(Square(row, col) for row, col in coords)


def test_scenario_a_horizontal_five(board_from_stones: BoardFactory) -> None:
    """Black builds (7,7)..(7,11) while White plays elsewhere. The last stone wins."""
    black = [(7, 7), (7, 8), (7, 9), (7, 10), (7, 11)]
    white = [(0, 0), (0, 2), (0, 4), (0, 6)]
    board = board_from_stones(black, white)

    result = check_win(board, 7, 11, Player.BLACK)
    assert result.winner == Player.BLACK
    assert result.line == squares(*black)


@pytest.mark.parametrize(
    "stones, last",
    [
        ([(2, 3), (3, 3), (4, 3), (5, 3), (6, 3)], (4, 3)),  # vertical, last stone in the middle
        ([(0, 0), (1, 1), (2, 2), (3, 3), (4, 4)], (0, 0)),  # diagonal \ starting in a corner
        ([(10, 4), (9, 5), (8, 6), (7, 7), (6, 8)], (8, 6)),  # diagonal /
        ([(14, 10), (14, 11), (14, 12), (14, 13), (14, 14)], (14, 14)),  # along the bottom edge
    ],
)
def test_five_along_each_axis(
    board_from_stones: BoardFactory, stones: list[tuple[int, int]], last: tuple[int, int]
) -> None:
    board = board_from_stones([], stones)
    result = check_win(board, *last, Player.WHITE)
    assert result.winner == Player.WHITE
    assert result.line is not None
    assert set(result.line) == set(squares(*stones))
    assert len(result.line) == 5


def test_line_is_ordered_from_end_to_end(board_from_stones: BoardFactory) -> None:
    """The line runs from one end of the run to the other, whichever stone was placed last."""
    stones = [(5, 5), (6, 6), (7, 7), (8, 8), (9, 9)]
    board = board_from_stones(stones, [])
    result = check_win(board, 7, 7, Player.BLACK)
    assert result.line == squares(*stones)


def test_line_is_not_clipped_to_five(board_from_stones: BoardFactory) -> None:
    stones = [(3, col) for col in range(2, 9)]  # seven in a row
    board = board_from_stones(stones, [])
    result = check_win(board, 3, 5, Player.BLACK)
    assert result.winner == Player.BLACK
    assert result.line == squares(*stones)
    assert len(result.line) == 7


def test_four_is_not_enough(board_from_stones: BoardFactory) -> None:
    board = board_from_stones([(7, 7), (7, 8), (7, 9), (7, 10)], [(7, 11), (7, 6)])
    assert check_win(board, 7, 10, Player.BLACK) == NO_WIN


def test_other_color_breaks_the_run(board_from_stones: BoardFactory) -> None:
    board = board_from_stones([(0, 0), (0, 1), (0, 3), (0, 4), (0, 5)], [(0, 2)])
    result = check_win(board, 0, 5, Player.BLACK)
    assert result.winner is None
    assert result.line is None


def test_first_axis_wins(board_from_stones: BoardFactory) -> None:
    """A stone completing a horizontal and a vertical five reports the horizontal one."""
    horizontal = [(7, 3), (7, 4), (7, 5), (7, 6), (7, 7)]
    vertical = [(3, 7), (4, 7), (5, 7), (6, 7)]
    board = board_from_stones(horizontal + vertical, [])
    result = check_win(board, 7, 7, Player.BLACK)
    assert result.line == squares(*horizontal)


def test_win_result_invariant() -> None:
    with pytest.raises(ValueError):
        WinResult(winner=Player.BLACK, line=None)
    with pytest.raises(ValueError):
        WinResult(winner=None, line=(Square(0, 0),))
