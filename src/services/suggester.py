"""
Move suggestions for the computer-controlled color.

The suggester itself is an external collaborator (it could be a remote service); `request_move` is the caller side of the
contract: whatever the suggester does, the player always gets a legal move back.
"""

import logging
import random
from typing import Optional, Protocol

from src.core.config import WIN_LENGTH
from src.core.exceptions import GameStateError, SuggesterError
from src.core.shared_types import Player
from src.gomoku.board import Board, Cell
from src.gomoku.moves import Move
from src.gomoku.square import Square
from src.gomoku.win import AXES

logger = logging.getLogger(__name__)


class MoveSuggester(Protocol):
    def suggest(self, board: Board, color: Player) -> Move:
        """Return a move for `color` on an empty, in-bounds square, or raise."""
        ...


def random_legal_move(board: Board, color: Player, rng: Optional[random.Random] = None) -> Move:
    """Uniformly random empty square."""
    empty = board.empty_squares()
    if not empty:
        raise GameStateError("No empty square left to play.")
    square = (rng or random.Random()).choice(empty)
    return Move(square.row, square.col, color)


def request_move(
    suggester: MoveSuggester,
    board: Board,
    color: Player,
    rng: Optional[random.Random] = None,
) -> Move:
    """
    Ask the suggester for a move and check it.
    ----
    Any failure (exception, wrong type, out of range, occupied square, wrong color) falls back to a random legal move.
    """
    try:
        move = suggester.suggest(board, color)
        _validate_suggestion(move, board, color)
    except Exception as exc:  # the suggester is a black box, any failure is recovered the same way
        logger.warning("Suggester failed (%s), falling back to a random move", exc)
        return random_legal_move(board, color, rng)
    return move


def _validate_suggestion(move: object, board: Board, color: Player) -> None:
    if not isinstance(move, Move):
        raise SuggesterError(f"Expected a Move, got {move!r}")
    if not all(isinstance(value, int) and not isinstance(value, bool) for value in (move.row, move.col)):
        raise SuggesterError(f"Coordinates must be integers: {move!r}")
    if not board.in_bounds(move.row, move.col):
        raise SuggesterError(f"Suggested square is off the board: {move!r}")
    if not board.is_empty(move.row, move.col):
        raise SuggesterError(f"Suggested square is occupied: {move!r}")
    if move.player != color:
        raise SuggesterError(f"Suggested a move for {move.player}, expected {color}")


class RandomSuggester:
    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def suggest(self, board: Board, color: Player) -> Move:
        return random_legal_move(board, color, self.rng)


class HeuristicSuggester:
    """
    One-ply pattern scoring.

    Every empty square near the existing stones gets scored twice: as an attacking move for `color`
    and as a blocking move against the opponent. The best square wins, ties are broken at random.
    """

    def __init__(self, rng: Optional[random.Random] = None, defense_weight: float = 0.9) -> None:
        self.rng = rng or random.Random()
        self.defense_weight = defense_weight

    def suggest(self, board: Board, color: Player) -> Move:
        candidates = candidate_squares(board)
        if not candidates:
            raise SuggesterError("Board is full.")

        best_score = float("-inf")
        best: list[Square] = []
        for square in candidates:
            attack = _square_score(board, square, Cell.of(color))
            defense = _square_score(board, square, Cell.of(color.opponent))
            score = attack + self.defense_weight * defense
            if score > best_score:
                best_score, best = score, [square]
            elif score == best_score:
                best.append(square)

        chosen = self.rng.choice(best)
        return Move(chosen.row, chosen.col, color)


def candidate_squares(board: Board, radius: int = 2) -> list[Square]:
    """Empty squares within `radius` of a stone. The center on an empty board."""
    occupied = [
        Square(row, col)
        for row in range(board.size)
        for col in range(board.size)
        if board.cells[row][col] != Cell.EMPTY
    ]
    if not occupied:
        center = board.size // 2
        return [Square(center, center)]

    seen: set[Square] = set()
    for stone in occupied:
        for d_row in range(-radius, radius + 1):
            for d_col in range(-radius, radius + 1):
                square = stone.shifted(d_row, d_col)
                if board.in_bounds(square.row, square.col) and board.is_empty(square.row, square.col):
                    seen.add(square)
    return sorted(seen, key=lambda sq: (sq.row, sq.col)) or board.empty_squares()


def _square_score(board: Board, square: Square, stone: Cell) -> float:
    """Value of putting `stone` on `square`, summed over the four axes."""
    return sum(_sequence_score(*_sequence_metrics(board, square, stone, axis)) for axis in AXES)


def _sequence_metrics(board: Board, square: Square, stone: Cell, axis: tuple[int, int]) -> tuple[int, int]:
    """Length of the run `stone` would form through `square` and how many of its ends are open."""
    length = 1
    open_ends = 0
    for sign in (1, -1):
        d_row, d_col = axis[0] * sign, axis[1] * sign
        current = square.shifted(d_row, d_col)
        while board.in_bounds(current.row, current.col) and board.cells[current.row][current.col] == stone:
            length += 1
            current = current.shifted(d_row, d_col)
        if board.in_bounds(current.row, current.col) and board.cells[current.row][current.col] == Cell.EMPTY:
            open_ends += 1
    return length, open_ends


def _sequence_score(length: int, open_ends: int) -> float:
    if length >= WIN_LENGTH:
        return 1_000_000.0
    if length == WIN_LENGTH - 1:
        return 50_000.0 if open_ends == 2 else 5_000.0
    if length == WIN_LENGTH - 2:
        return 2_000.0 if open_ends == 2 else 400.0
    if length == WIN_LENGTH - 3:
        return 200.0 if open_ends == 2 else 50.0
    return 1.0 + open_ends
