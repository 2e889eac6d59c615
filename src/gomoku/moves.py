"""A move is a stone of a given color placed on a square."""

from dataclasses import dataclass
from typing import Self

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Player
from src.gomoku.square import Square


@dataclass(frozen=True)
class Move:
    row: int
    col: int
    player: Player

    @property
    def square(self) -> Square:
        return Square(self.row, self.col)

    @classmethod
    def from_text(cls, text: str) -> Self:
        """Inverse of to_text: 'row,col,player'"""
        parts = text.split(",")
        if len(parts) != 3:
            raise InvalidRequestError(f"Cannot interpret {text!r} as a move.")
        row, col, player = parts
        try:
            return cls(int(row), int(col), Player(player))
        except ValueError as exc:
            raise InvalidRequestError(f"Cannot interpret {text!r} as a move.") from exc

    def to_text(self) -> str:
        return f"{self.row},{self.col},{self.player}"
