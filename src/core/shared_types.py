"""
Type definitions used across layers
"""

from enum import StrEnum


class Player(StrEnum):
    BLACK = "black"
    WHITE = "white"

    @property
    def opponent(self) -> "Player":
        return Player.WHITE if self == Player.BLACK else Player.BLACK


class GameMode(StrEnum):
    PVP_LOCAL = "pvp_local"
    PVE_SUGGESTER = "pve_suggester"
    PVP_ONLINE = "pvp_online"


class Status(StrEnum):
    IDLE = "idle"
    PLAYING = "playing"
    ENDED = "ended"


class Role(StrEnum):
    HOST = "host"
    GUEST = "guest"
    NONE = "none"


class ConnectionState(StrEnum):
    IDLE = "idle"
    WAITING = "waiting"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    ERROR = "error"


# Host always plays Black, Guest always plays White
ROLE_COLORS: dict[Role, Player] = {
    Role.HOST: Player.BLACK,
    Role.GUEST: Player.WHITE,
}
