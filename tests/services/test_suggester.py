"""Unit tests for src/services/suggester.py"""

import random
from typing import Callable
from unittest.mock import Mock

import pytest

from src.core.exceptions import GameStateError, SuggesterError
from src.core.shared_types import Player
from src.gomoku.board import Board
from src.gomoku.moves import Move
from src.gomoku.square import Square
from src.services.suggester import (
    HeuristicSuggester,
    RandomSuggester,
    candidate_squares,
    random_legal_move,
    request_move,
)

BoardFactory = Callable[[list[tuple[int, int]], list[tuple[int, int]]], Board]


def full_board_but(row: int, col: int) -> Board:
    board = Board.empty(size=3)
    players = [Player.BLACK, Player.WHITE]
    for index, (r, c) in enumerate((r, c) for r in range(3) for c in range(3) if (r, c) != (row, col)):
        board = board.place(r, c, players[index % 2])
    return board


def test_random_legal_move_only_picks_empty_squares() -> None:
    board = full_board_but(1, 2)
    for seed in range(10):
        assert random_legal_move(board, Player.WHITE, random.Random(seed)) == Move(1, 2, Player.WHITE)


def test_random_legal_move_on_full_board() -> None:
    board = full_board_but(0, 0).place(0, 0, Player.BLACK)
    with pytest.raises(GameStateError):
        random_legal_move(board, Player.WHITE)


def test_valid_suggestion_is_used() -> None:
    suggester = Mock()
    suggester.suggest.return_value = Move(3, 4, Player.WHITE)
    board = Board.empty()

    assert request_move(suggester, board, Player.WHITE) == Move(3, 4, Player.WHITE)
    suggester.suggest.assert_called_once_with(board, Player.WHITE)


@pytest.mark.parametrize(
    "suggestion",
    [
        Move(15, 0, Player.WHITE),  # off the board
        Move(-1, 3, Player.WHITE),
        Move(0, 0, Player.WHITE),  # occupied
        Move(1, 1, Player.BLACK),  # wrong color
        (1, 1),  # not a Move
        None,
    ],
)
def test_bad_suggestion_falls_back_to_random(suggestion: object) -> None:
    suggester = Mock()
    suggester.suggest.return_value = suggestion
    board = Board.empty().place(0, 0, Player.BLACK)

    move = request_move(suggester, board, Player.WHITE, random.Random(1))
    assert move.player == Player.WHITE
    assert board.is_empty(move.row, move.col)


def test_suggester_exception_falls_back_to_random() -> None:
    suggester = Mock()
    suggester.suggest.side_effect = TimeoutError("service took too long")
    board = full_board_but(2, 2)

    assert request_move(suggester, board, Player.BLACK) == Move(2, 2, Player.BLACK)


def test_random_suggester() -> None:
    board = full_board_but(0, 1)
    assert RandomSuggester(random.Random(3)).suggest(board, Player.BLACK) == Move(0, 1, Player.BLACK)


def test_candidates_on_empty_board_is_center() -> None:
    assert candidate_squares(Board.empty()) == [Square(7, 7)]


def test_candidates_surround_stones() -> None:
    board = Board.empty().place(0, 0, Player.BLACK)
    candidates = candidate_squares(board)
    assert Square(0, 0) not in candidates
    assert Square(2, 2) in candidates
    assert Square(3, 3) not in candidates
    assert len(candidates) == 8


def test_heuristic_completes_its_own_five(board_from_stones: BoardFactory) -> None:
    board = board_from_stones([(0, 0), (0, 2)], [(5, 5), (5, 6), (5, 7), (5, 8)])
    move = HeuristicSuggester(random.Random(0)).suggest(board, Player.WHITE)
    assert move.player == Player.WHITE
    assert (move.row, move.col) in {(5, 4), (5, 9)}


def test_heuristic_blocks_open_four(board_from_stones: BoardFactory) -> None:
    board = board_from_stones([(7, 4), (7, 5), (7, 6), (7, 7)], [(0, 0), (14, 14), (0, 14)])
    move = HeuristicSuggester(random.Random(0)).suggest(board, Player.WHITE)
    assert (move.row, move.col) in {(7, 3), (7, 8)}


def test_heuristic_on_full_board() -> None:
    board = full_board_but(0, 0).place(0, 0, Player.BLACK)
    with pytest.raises(SuggesterError):
        HeuristicSuggester().suggest(board, Player.WHITE)
