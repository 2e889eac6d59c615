"""The board holds the stones. It is an immutable value: placing a stone returns a new board."""

from dataclasses import dataclass
from enum import Enum
from typing import Self

from src.core.config import BOARD_SIZE
from src.core.exceptions import CellOccupiedError, InvalidRequestError, OutOfRangeError
from src.core.shared_types import Player
from src.gomoku.square import Square


class Cell(Enum):
    EMPTY = "."
    BLACK = "b"
    WHITE = "w"

    @classmethod
    def of(cls, player: Player) -> Self:
        return cls.BLACK if player == Player.BLACK else cls.WHITE

    @property
    def player(self) -> Player | None:
        if self == Cell.EMPTY:
            return None
        return Player.BLACK if self == Cell.BLACK else Player.WHITE


Grid = tuple[tuple[Cell, ...], ...]


@dataclass(frozen=True)
class Board:
    cells: Grid

    @classmethod
    def empty(cls, size: int = BOARD_SIZE) -> Self:
        return cls(tuple(tuple(Cell.EMPTY for _ in range(size)) for _ in range(size)))

    @classmethod
    def from_text(cls, text: str) -> Self:
        """Construct a board from its text encoding.

        One character per cell ('.' empty, 'b' black, 'w' white), rows separated by slashes.
        ex. a 3x3 board with a black stone in the center: '.../.b./...'
        """
        rows = text.split("/")
        try:
            cells = tuple(tuple(Cell(character) for character in row) for row in rows)
        except ValueError as exc:
            raise InvalidRequestError(f"Invalid board text: {text!r}") from exc
        if any(len(row) != len(rows) for row in cells):
            raise InvalidRequestError(f"Board text must describe a square grid: {text!r}")
        return cls(cells)

    def to_text(self) -> str:
        return "/".join("".join(cell.value for cell in row) for row in self.cells)

    @property
    def size(self) -> int:
        return len(self.cells)

    def in_bounds(self, row: int, col: int) -> bool:
        return Square(row, col).is_within_bounds(self.size)

    def get(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise OutOfRangeError(f"Square ({row}, {col}) is outside the {self.size}x{self.size} board.")
        return self.cells[row][col]

    def is_empty(self, row: int, col: int) -> bool:
        return self.get(row, col) == Cell.EMPTY

    def place(self, row: int, col: int, player: Player) -> Self:
        """Return a copy of the board with one extra stone. The current board is left untouched."""
        if self.get(row, col) != Cell.EMPTY:
            raise CellOccupiedError(f"Square ({row}, {col}) is already occupied.")

        changed_row = list(self.cells[row])
        changed_row[col] = Cell.of(player)
        cells = self.cells[:row] + (tuple(changed_row),) + self.cells[row + 1 :]
        return type(self)(cells)

    def is_full(self) -> bool:
        return all(cell != Cell.EMPTY for row in self.cells for cell in row)

    def empty_squares(self) -> list[Square]:
        return [
            Square(row_idx, col_idx)
            for row_idx, row in enumerate(self.cells)
            for col_idx, cell in enumerate(row)
            if cell == Cell.EMPTY
        ]

    def count(self, cell: Cell) -> int:
        return sum(row.count(cell) for row in self.cells)
