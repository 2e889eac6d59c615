"""
Online session: keeps the local Game in sync with the peer's Game.

Host (Black) claims a channel derived from the room id and waits. Guest (White) dials it.
Once the transport reports the peer attached, the Host starts its game and sends START_GAME;
the Guest starts its own game when that message arrives.
Moves are applied locally first and then sent, without acknowledgement (best effort, at most once).
"""

import logging
import queue
import random
import string
from collections import deque
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from src.core.config import DEFAULT_CHANNEL_PREFIX, ROOM_ID_LENGTH
from src.core.exceptions import (
    GameStateError,
    InvalidMessageError,
    InvalidMoveError,
    InvalidRoomIdError,
    TransportError,
)
from src.core.shared_types import ROLE_COLORS, ConnectionState, GameMode, Role, Status
from src.gomoku.authority import may_submit
from src.gomoku.game import Game, MoveOutcome
from src.gomoku.moves import Move
from src.session.messages import (
    JoinMessage,
    LeaveMessage,
    Message,
    MoveMessage,
    RestartMessage,
    StartGameMessage,
    decode_message,
    encode_message,
)
from src.session.transport import EventKind, Transport, TransportEvent

logger = logging.getLogger(__name__)

ROOM_ID_ALPHABET = string.ascii_uppercase + string.digits


class Notice(StrEnum):
    """Things the surrounding application should tell the user about."""

    PEER_JOINED = "peer joined"
    OPPONENT_LEFT = "opponent left"
    CONNECTION_ERROR = "connection error"


@dataclass
class GameSession:
    role: Role
    room_id: str
    connection_state: ConnectionState = ConnectionState.IDLE


def generate_room_id(rng: Optional[random.Random] = None) -> str:
    """Random 5 character room id. No uniqueness guarantee."""
    rng = rng or random.Random()
    return "".join(rng.choice(ROOM_ID_ALPHABET) for _ in range(ROOM_ID_LENGTH))


def normalize_room_id(room_id: str) -> str:
    """Upper-case what the user typed and make sure it looks like a room id."""
    normalized = room_id.strip().upper()
    if len(normalized) != ROOM_ID_LENGTH or any(ch not in ROOM_ID_ALPHABET for ch in normalized):
        raise InvalidRoomIdError(
            f"Room id must be {ROOM_ID_LENGTH} letters or digits, got {room_id!r}."
        )
    return normalized


class SessionProtocol:
    """Connection lifecycle and message exchange for one online game."""

    def __init__(
        self,
        game: Game,
        transport: Transport,
        channel_prefix: str = DEFAULT_CHANNEL_PREFIX,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.game = game
        self.transport = transport
        self.channel_prefix = channel_prefix
        self.rng = rng or random.Random()
        self.session: Optional[GameSession] = None
        self.notices: deque[Notice] = deque()

    # -- LIFECYCLE ---
    @property
    def connection_state(self) -> ConnectionState:
        return self.session.connection_state if self.session else ConnectionState.IDLE

    @property
    def role(self) -> Role:
        return self.session.role if self.session else Role.NONE

    def channel_id(self, room_id: str) -> str:
        return f"{self.channel_prefix}{room_id}"

    def create_room(self, room_id: Optional[str] = None) -> GameSession:
        """Host a new room and wait for a Guest to attach."""
        room = normalize_room_id(room_id) if room_id else generate_room_id(self.rng)
        self._begin(Role.HOST, room, ConnectionState.WAITING)
        try:
            self.transport.open(self.channel_id(room))
        except TransportError as exc:
            self._fail(str(exc))
        return self._current_session()

    def join_room(self, room_id: str) -> GameSession:
        """Dial the Host of an existing room. The game starts once the Host says so."""
        room = normalize_room_id(room_id)
        self._begin(Role.GUEST, room, ConnectionState.CONNECTING)
        try:
            self.transport.connect(self.channel_id(room))
        except TransportError as exc:
            self._fail(str(exc))
        return self._current_session()

    def leave(self) -> None:
        """Intentional exit: tell the peer, hang up, go back to idle."""
        if self.session is None:
            return
        self._send(LeaveMessage())
        self._teardown()

    def pop_notices(self) -> list[Notice]:
        notices = list(self.notices)
        self.notices.clear()
        return notices

    # -- LOCAL ACTIONS ---
    def submit_local_move(self, row: int, col: int) -> Optional[MoveOutcome]:
        """
        A stone placed on this device.
        ----
        Dropped without side effects unless the session is connected, the game is on,
        and it is the turn of the color this peer plays. Otherwise applied locally, then sent.
        """
        if self.session is None or self.session.connection_state != ConnectionState.CONNECTED:
            logger.debug("Move (%d, %d) dropped: not connected", row, col)
            return None
        if self.game.status != Status.PLAYING:
            logger.debug("Move (%d, %d) dropped: game is not in progress", row, col)
            return None
        player = self.game.current_player
        if not may_submit(GameMode.PVP_ONLINE, self.session.role, player):
            logger.debug("Move (%d, %d) dropped: %s cannot play %s", row, col, self.session.role, player)
            return None

        try:
            outcome = self.game.apply_move(row, col, player)
        except InvalidMoveError as exc:
            logger.warning("Local move rejected: %s", exc)
            return None

        if not self._send(MoveMessage.from_move(outcome.move)):
            logger.warning("Move %s applied locally but could not be sent", outcome.move)
        return outcome

    def request_restart(self) -> None:
        """Either side may restart. Both boards get cleared."""
        if self.session is None:
            raise GameStateError("No online session to restart.")
        if self.session.connection_state != ConnectionState.CONNECTED:
            logger.warning("Restart dropped: not connected to a peer")
            return
        self._send(RestartMessage())
        self._restart_local()

    # -- INBOUND ---
    def process_events(self) -> int:
        """Handle every event the transport has queued so far, in order. Returns how many were handled."""
        handled = 0
        while True:
            try:
                event = self.transport.events.get_nowait()
            except queue.Empty:
                return handled
            self.handle_event(event)
            handled += 1

    def handle_event(self, event: TransportEvent) -> None:
        if self.session is None:
            logger.debug("Ignoring %s event: no session", event.kind)
            return

        if event.kind == EventKind.OPENED:
            self._on_opened()
        elif event.kind == EventKind.DATA:
            self._on_data(event.data)
        elif event.kind == EventKind.CLOSED:
            logger.info("Channel closed by peer")
            self.session.connection_state = ConnectionState.DISCONNECTED
            self.handle_message(LeaveMessage())
        elif event.kind == EventKind.ERROR:
            self._fail(event.reason or "unknown transport error")

    def handle_message(self, message: Message) -> None:
        if self.session is None:
            logger.debug("Ignoring %s: no session", message.type)
            return

        match message:
            case JoinMessage():
                self._on_join()
            case StartGameMessage():
                self._on_start_game()
            case MoveMessage():
                self._on_remote_move(message.to_move())
            case RestartMessage():
                logger.info("Peer restarted the game")
                self._restart_local()
            case LeaveMessage():
                logger.info("Opponent left room %s", self.session.room_id)
                self._teardown()
                self.notices.append(Notice.OPPONENT_LEFT)
            case _:
                logger.warning("Ignoring unknown message %r", message)

    # -- PRIVATE HELPERS ---
    def _on_opened(self) -> None:
        session = self._current_session()
        session.connection_state = ConnectionState.CONNECTED
        logger.info("Connected to peer in room %s as %s", session.room_id, session.role)
        if session.role == Role.HOST:
            # the Host learns about the Guest from the transport, not from the wire
            self.handle_message(JoinMessage())

    def _on_data(self, data: Optional[str]) -> None:
        logger.debug("Received %r", data)
        if data is None:
            return
        try:
            message = decode_message(data)
        except InvalidMessageError as exc:
            logger.warning("Dropping malformed message: %s", exc)
            return
        if isinstance(message, JoinMessage):
            # JOIN only comes from the transport attaching the Guest
            logger.warning("Ignoring JOIN received over the wire")
            return
        self.handle_message(message)

    def _on_join(self) -> None:
        if self.role != Role.HOST:
            logger.warning("Ignoring JOIN: only the Host handles it")
            return
        self.notices.append(Notice.PEER_JOINED)
        self._send(StartGameMessage())
        self.game.start(GameMode.PVP_ONLINE)

    def _on_start_game(self) -> None:
        if self.role != Role.GUEST:
            logger.warning("Ignoring START_GAME: only the Guest handles it")
            return
        self.game.start(GameMode.PVP_ONLINE)

    def _on_remote_move(self, move: Move) -> None:
        # remote moves skip the authority check: the peer already did it on its side
        if move.player == ROLE_COLORS.get(self.role):
            logger.warning("Peer sent a move for our own color: %s", move)
        if move.player != self.game.current_player:
            logger.warning("Remote move out of turn, applying anyway: %s", move)
        try:
            self.game.apply_move(move.row, move.col, move.player)
        except InvalidMoveError as exc:
            logger.warning("Remote move %s rejected: %s", move, exc)

    def _restart_local(self) -> None:
        self.game.start(GameMode.PVP_ONLINE)

    def _send(self, message: Message) -> bool:
        payload = encode_message(message)
        logger.debug("Sending %s", payload)
        try:
            return self.transport.send(payload)
        except TransportError as exc:
            logger.warning("Send failed: %s", exc)
            return False

    def _begin(self, role: Role, room_id: str, state: ConnectionState) -> None:
        if self.session is not None:
            self.leave()
        self.session = GameSession(role=role, room_id=room_id, connection_state=state)
        logger.info("Session %s as %s (%s)", room_id, role, state)

    def _fail(self, reason: str) -> None:
        logger.error("Connection error: %s", reason)
        self._current_session().connection_state = ConnectionState.ERROR
        self.notices.append(Notice.CONNECTION_ERROR)

    def _teardown(self) -> None:
        self.transport.close()
        self.game.stop()
        self.session = None
        # whatever is still queued belongs to the session that just ended
        while not self.transport.events.empty():
            self.transport.events.get_nowait()

    def _current_session(self) -> GameSession:
        if self.session is None:
            raise GameStateError("No online session.")
        return self.session
