"""
Wire messages exchanged between two peers.

A closed set of message types, one model per type. Only MOVE carries a payload:
{"type": "MOVE", "payload": {"move": {"x": row, "y": col}, "player": "black"|"white"}}
"""

import json
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, ValidationError

from src.core.exceptions import InvalidMessageError
from src.core.shared_types import Player
from src.gomoku.moves import Move


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


# --- PAYLOAD ---
class Coordinates(_WireModel):
    x: StrictInt  # row
    y: StrictInt  # column


class MovePayload(_WireModel):
    move: Coordinates
    player: Player


# --- MESSAGES ---
class JoinMessage(_WireModel):
    type: Literal["JOIN"] = "JOIN"


class StartGameMessage(_WireModel):
    type: Literal["START_GAME"] = "START_GAME"


class MoveMessage(_WireModel):
    type: Literal["MOVE"] = "MOVE"
    payload: MovePayload

    @classmethod
    def from_move(cls, move: Move) -> "MoveMessage":
        return cls(payload=MovePayload(move=Coordinates(x=move.row, y=move.col), player=move.player))

    def to_move(self) -> Move:
        return Move(self.payload.move.x, self.payload.move.y, self.payload.player)


class RestartMessage(_WireModel):
    type: Literal["RESTART"] = "RESTART"


class LeaveMessage(_WireModel):
    type: Literal["LEAVE"] = "LEAVE"


Message = Annotated[
    Union[JoinMessage, StartGameMessage, MoveMessage, RestartMessage, LeaveMessage],
    Field(discriminator="type"),
]
_MESSAGE_ADAPTER: TypeAdapter[Message] = TypeAdapter(Message)


def encode_message(message: Message) -> str:
    """Serialize to JSON text. `payload` is left out for the message types without one."""
    return message.model_dump_json()


def decode_message(data: str | bytes | dict) -> Message:
    """Parse inbound data into exactly one known message type, or raise InvalidMessageError."""
    try:
        raw = json.loads(data) if isinstance(data, (str, bytes)) else data
    except (ValueError, RecursionError) as exc:
        # ValueError covers JSONDecodeError and UnicodeDecodeError
        raise InvalidMessageError(f"Message is not valid JSON: {type(exc).__name__}") from exc
    if not isinstance(raw, dict):
        raise InvalidMessageError(f"Message must be a JSON object, got {type(raw).__name__}.")

    try:
        return _MESSAGE_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        raise InvalidMessageError(f"Unrecognized message {raw!r}: {exc.error_count()} error(s)") from exc
