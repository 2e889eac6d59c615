"""
A square (intersection) on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.config import BOARD_SIZE


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    def is_within_bounds(self, size: int = BOARD_SIZE) -> bool:
        return (0 <= self.row < size) and (0 <= self.col < size)

    def shifted(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)

    def to_label(self) -> str:
        """Human readable label: column letter + row number, ex. (7, 7) -> 'H7'"""
        return f"{chr(ord('A') + self.col)}{self.row}"
