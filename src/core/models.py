"""
Boundary layer data model(s).

These objects are used to communicate between the service layer and the persistence layer.
(Decouples the data model specific to the DB layer from the domain objects in src/gomoku)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
BoardText = str
MoveText = str  # "row,col,player"


@dataclass
class GameModel:
    """Transport-safe representation of a Gomoku game used between Service, DB, and Game layers."""

    board: BoardText
    moves: list[MoveText]
    mode: str
    status: str
    current_player: str
    winner: Optional[str] = None
    winning_line: list[list[int]] = field(default_factory=list)
