"""Who may place a stone from this device."""

from src.core.shared_types import ROLE_COLORS, GameMode, Player, Role

# in a game against the suggester, the human always holds Black
HUMAN_COLOR_VS_SUGGESTER = Player.BLACK


def may_submit(mode: GameMode, role: Role, current_player: Player) -> bool:
    """
    Decide whether a move entered on this device is allowed to reach the game.
    ----
    * same device: both colors are local, always allowed
    * online: Host only moves for Black, Guest only for White
    * against the suggester: only the human's color
    """
    if mode == GameMode.PVP_LOCAL:
        return True
    if mode == GameMode.PVP_ONLINE:
        return ROLE_COLORS.get(role) == current_player
    if mode == GameMode.PVE_SUGGESTER:
        return current_player == HUMAN_COLOR_VS_SUGGESTER
    return False
