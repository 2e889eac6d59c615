"""Win detection: does the stone just placed complete five (or more) in a row?"""

from dataclasses import dataclass
from typing import Optional

from src.core.config import WIN_LENGTH
from src.core.shared_types import Player
from src.gomoku.board import Board, Cell
from src.gomoku.square import Square

# horizontal, vertical, diagonal \, diagonal /
AXES: tuple[tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))


@dataclass(frozen=True)
class WinResult:
    winner: Optional[Player] = None
    line: Optional[tuple[Square, ...]] = None

    def __post_init__(self) -> None:
        if (self.winner is None) != (self.line is None):
            raise ValueError("A winning line is given if and only if there is a winner.")


NO_WIN = WinResult()


def check_win(board: Board, row: int, col: int, player: Player) -> WinResult:
    """
    Look along the four axes through (row, col) for a run of the player's stones.
    ----
    The first axis with a run of at least WIN_LENGTH wins. The returned line holds the full run
    (not clipped to five), ordered from one end of the run to the other.
    """
    origin = Square(row, col)
    stone = Cell.of(player)
    for d_row, d_col in AXES:
        forward = _walk(board, origin, stone, d_row, d_col)
        backward = _walk(board, origin, stone, -d_row, -d_col)
        line = tuple(reversed(backward)) + (origin,) + tuple(forward)
        if len(line) >= WIN_LENGTH:
            return WinResult(winner=player, line=line)
    return NO_WIN


def _walk(board: Board, origin: Square, stone: Cell, d_row: int, d_col: int) -> list[Square]:
    """Collect consecutive squares holding `stone`, stepping away from origin (origin excluded)."""
    run: list[Square] = []
    square = origin.shifted(d_row, d_col)
    while board.in_bounds(square.row, square.col) and board.cells[square.row][square.col] == stone:
        run.append(square)
        square = square.shifted(d_row, d_col)
    return run
