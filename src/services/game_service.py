"""Orchestration of local input, the move suggester, the online session, and persistence around one Game."""

import logging
import random
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from src.core.config import Settings, load_settings
from src.core.exceptions import GameStateError, InvalidMoveError, RepositoryError
from src.core.shared_types import GameMode, Player, Role, Status
from src.db.repository import GameRepository
from src.gomoku.authority import HUMAN_COLOR_VS_SUGGESTER, may_submit
from src.gomoku.board import Board
from src.gomoku.game import Game, MoveOutcome
from src.gomoku.moves import Move
from src.services.suggester import HeuristicSuggester, MoveSuggester, request_move
from src.session.protocol import GameSession, Notice, SessionProtocol
from src.session.transport import Transport

logger = logging.getLogger(__name__)

SUGGESTER_COLOR = HUMAN_COLOR_VS_SUGGESTER.opponent


@dataclass
class PendingSuggestion:
    """A suggestion that was asked for, and the game it was asked for."""

    future: "Future[Move]"
    game: Game
    generation: int
    move_count: int
    color: Player


class GameService:
    """Single point of control for one player's device."""

    def __init__(
        self,
        suggester: Optional[MoveSuggester] = None,
        transport: Optional[Transport] = None,
        repository: Optional[GameRepository] = None,
        executor: Optional[Executor] = None,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.rng = rng or random.Random()
        self.game = Game()
        self.suggester = suggester or HeuristicSuggester(self.rng)
        self.repo = repository
        self.executor = executor or ThreadPoolExecutor(max_workers=1)
        self.online: Optional[SessionProtocol] = (
            SessionProtocol(self.game, transport, self.settings.channel_prefix, self.rng)
            if transport is not None
            else None
        )
        self.pending: list[PendingSuggestion] = []

    # -- MENU ---
    def start_local(self) -> None:
        self._leave_online()
        self.game.start(GameMode.PVP_LOCAL)

    def start_against_suggester(self) -> None:
        self._leave_online()
        self.game.start(GameMode.PVE_SUGGESTER)

    def create_room(self, room_id: Optional[str] = None) -> GameSession:
        online = self._require_online()
        self.game.stop()
        return online.create_room(room_id)

    def join_room(self, room_id: str) -> GameSession:
        online = self._require_online()
        self.game.stop()
        return online.join_room(room_id)

    def return_to_menu(self) -> None:
        self._leave_online()
        self.game.stop()

    # -- INPUT ---
    @property
    def role(self) -> Role:
        return self.online.role if self.online else Role.NONE

    def click(self, row: int, col: int) -> Optional[MoveOutcome]:
        """
        The one way a local player places a stone.
        ----
        Moves the MoveAuthority refuses are dropped. Online moves go through the session (which also sends them),
        and against the suggester the computer's reply is requested right away.
        """
        if self.game.status != Status.PLAYING or self.game.mode is None:
            return None
        if self.game.mode == GameMode.PVP_ONLINE:
            online = self._require_online()
            return online.submit_local_move(row, col)

        player = self.game.current_player
        if not may_submit(self.game.mode, self.role, player):
            logger.debug("Move (%d, %d) dropped: %s is not played from this device", row, col, player)
            return None
        try:
            outcome = self.game.apply_move(row, col, player)
        except InvalidMoveError as exc:
            logger.warning("Move rejected: %s", exc)
            return None

        if self.game.mode == GameMode.PVE_SUGGESTER and self._suggester_to_move():
            self._ask_suggester()
        return outcome

    def restart(self) -> None:
        if self.game.mode == GameMode.PVP_ONLINE and self.online and self.online.session:
            self.online.request_restart()
        else:
            self.game.restart()

    # -- ASYNCHRONOUS COMPLETIONS ---
    def poll(self) -> list[Notice]:
        """Process everything that arrived since the last call: network events, then finished suggestions."""
        notices: list[Notice] = []
        if self.online is not None:
            self.online.process_events()
            notices = self.online.pop_notices()

        still_pending: list[PendingSuggestion] = []
        for pending in self.pending:
            if pending.future.done():
                self._complete_suggestion(pending)
            else:
                still_pending.append(pending)
        self.pending = still_pending
        return notices

    def wait_for_suggestions(self, timeout: Optional[float] = None) -> None:
        """Block until every outstanding suggestion finished, then apply them."""
        wait([pending.future for pending in self.pending], timeout=timeout)
        self.poll()

    # -- PERSISTENCE ---
    def save(self, game_id: Optional[UUID] = None) -> UUID:
        """Store the current game. Overwrites the record when an ID is given."""
        repo = self._require_repository()
        model = self.game.to_model()
        if game_id is None:
            _, game_id = repo.create_game(model)
        elif repo.update_game(game_id, model) is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_id

    def load(self, game_id: UUID) -> Game:
        """Continue a stored game (local modes only)."""
        repo = self._require_repository()
        model = repo.get_game(game_id)
        if model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        restored = Game.from_model(model)
        if restored.mode == GameMode.PVP_ONLINE:
            raise GameStateError("Online games cannot be resumed from storage.")

        self._leave_online()
        self.game = restored
        if self.online is not None:
            self.online.game = restored
        if self.game.mode == GameMode.PVE_SUGGESTER and self._suggester_to_move():
            self._ask_suggester()
        return self.game

    def shutdown(self) -> None:
        self._leave_online()
        self.executor.shutdown(wait=False)

    # -- PRIVATE HELPERS ---
    def _suggester_to_move(self) -> bool:
        return self.game.status == Status.PLAYING and self.game.current_player == SUGGESTER_COLOR

    def _ask_suggester(self) -> None:
        board = self.game.board
        future = self.executor.submit(self._suggest, board, SUGGESTER_COLOR)
        self.pending.append(
            PendingSuggestion(
                future=future,
                game=self.game,
                generation=self.game.generation,
                move_count=len(self.game.moves),
                color=SUGGESTER_COLOR,
            )
        )

    def _suggest(self, board: Board, color: Player) -> Move:
        # runs on the executor: only reads the (immutable) board snapshot
        if self.settings.suggester_delay > 0:
            time.sleep(self.settings.suggester_delay)
        return request_move(self.suggester, board, color, self.rng)

    def _complete_suggestion(self, pending: PendingSuggestion) -> None:
        """Apply a finished suggestion, unless the game moved on while it was being computed."""
        try:
            move = pending.future.result()
        except GameStateError as exc:
            logger.warning("No suggestion possible: %s", exc)
            return

        game = self.game
        is_stale = (
            pending.game is not game
            or pending.generation != game.generation
            or pending.move_count != len(game.moves)
            or game.mode != GameMode.PVE_SUGGESTER
            or game.current_player != pending.color
            or not game.is_legal(move.row, move.col)
        )
        if is_stale:
            logger.info("Discarding stale suggestion %s", move)
            return
        game.apply_move(move.row, move.col, move.player)

    def _leave_online(self) -> None:
        if self.online is not None and self.online.session is not None:
            self.online.leave()

    def _require_online(self) -> SessionProtocol:
        if self.online is None:
            raise GameStateError("Online play needs a transport.")
        return self.online

    def _require_repository(self) -> GameRepository:
        if self.repo is None:
            raise RepositoryError("No repository configured.")
        return self.repo
