"""
The Game class is the entrypoint into the domain layer for the service and session layers.
It is responsible for orchestrating a turn: applying the move to the board, checking for the end of the game,
and handing the turn to the other player.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import GameStateError, InvalidMoveError, InvalidRequestError
from src.core.config import WIN_LENGTH
from src.core.models import GameModel
from src.core.shared_types import GameMode, Player, Status
from src.gomoku.board import Board
from src.gomoku.moves import Move
from src.gomoku.square import Square
from src.gomoku.win import NO_WIN, WinResult, check_win

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveOutcome:
    """What happened after a move got accepted."""

    move: Move
    win: WinResult
    status: Status
    next_player: Player

    @property
    def is_draw(self) -> bool:
        return self.status == Status.ENDED and self.win.winner is None


@dataclass
class Game:
    board: Board = field(default_factory=Board.empty)
    status: Status = Status.IDLE
    mode: Optional[GameMode] = None
    current_player: Player = Player.BLACK
    win: WinResult = NO_WIN
    moves: list[Move] = field(default_factory=list)
    # bumped on every start/restart/stop, so late asynchronous results can tell they are stale
    generation: int = 0

    # --- CONVERSION ---
    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        try:
            status = Status(model.status)
            mode = GameMode(model.mode) if model.mode else None
            current_player = Player(model.current_player)
            winner = Player(model.winner) if model.winner else None
        except ValueError as exc:
            raise GameStateError(f"Cannot restore game from model: {exc}") from exc

        if winner and len(model.winning_line) < WIN_LENGTH:
            raise GameStateError(f"Stored winner {winner} has no winning line.")
        line = tuple(Square(row, col) for row, col in model.winning_line) if winner else None
        return cls(
            board=Board.from_text(model.board),
            status=status,
            mode=mode,
            current_player=current_player,
            win=WinResult(winner=winner, line=line),
            moves=[Move.from_text(move) for move in model.moves],
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            board=self.board.to_text(),
            moves=[move.to_text() for move in self.moves],
            mode=self.mode.value if self.mode else "",
            status=self.status.value,
            current_player=self.current_player.value,
            winner=self.win.winner.value if self.win.winner else None,
            winning_line=[[sq.row, sq.col] for sq in self.win.line or ()],
        )

    # --- STATE MACHINE ---
    @property
    def winner(self) -> Optional[Player]:
        return self.win.winner

    @property
    def is_draw(self) -> bool:
        return self.status == Status.ENDED and self.win.winner is None

    @property
    def last_move(self) -> Optional[Move]:
        return self.moves[-1] if self.moves else None

    def start(self, mode: GameMode) -> None:
        """Fresh board, Black to move."""
        self.mode = mode
        self._reset_board()
        self.status = Status.PLAYING
        logger.info("Game started in mode %s", mode)

    def restart(self) -> None:
        """Start over with the same mode, no matter how (or if) the previous game ended."""
        if self.mode is None:
            raise GameStateError("Cannot restart: no game mode was ever started.")
        self.start(self.mode)

    def stop(self) -> None:
        """Back to the menu: no mode, no stones."""
        self.mode = None
        self._reset_board()
        self.status = Status.IDLE

    def apply_move(self, row: int, col: int, player: Player) -> MoveOutcome:
        """
        Attempt to place a stone
        -----
        1. game must be in progress
        2. the board refuses out of bounds and occupied squares (raises, board stays as it was)
        3. check for five in a row, then for a full board
        4. the opponent of the mover is next
        """
        if self.status != Status.PLAYING:
            raise InvalidMoveError(f"Game is not in progress. status: {self.status}")

        new_board = self.board.place(row, col, player)
        move = Move(row, col, player)
        self.board = new_board
        self.moves.append(move)

        self.win = check_win(new_board, row, col, player)
        if self.win.winner is not None:
            self.status = Status.ENDED
            logger.info("%s wins with %s", player, [sq.to_label() for sq in self.win.line or ()])
        elif new_board.is_full():
            self.status = Status.ENDED
            logger.info("Board is full, the game is a draw")
        else:
            self.current_player = player.opponent

        return MoveOutcome(
            move=move,
            win=self.win,
            status=self.status,
            next_player=self.current_player,
        )

    def is_legal(self, row: int, col: int) -> bool:
        """Would a stone on (row, col) be accepted right now?"""
        if self.status != Status.PLAYING:
            return False
        return self.board.in_bounds(row, col) and self.board.is_empty(row, col)

    # -- PRIVATE HELPERS ---
    def _reset_board(self) -> None:
        self.board = Board.empty(self.board.size)
        self.current_player = Player.BLACK
        self.win = NO_WIN
        self.moves = []
        self.generation += 1


def parse_coordinates(text: str) -> tuple[int, int]:
    """'7 8' or '7,8' -> (7, 8)"""
    parts = text.replace(",", " ").split()
    if len(parts) != 2 or not all(part.lstrip("-").isdigit() for part in parts):
        raise InvalidRequestError(f"Cannot interpret {text!r} as 'row col'.")
    return int(parts[0]), int(parts[1])
