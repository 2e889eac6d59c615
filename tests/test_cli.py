"""Unit tests for src/cli.py"""

from uuid import uuid4

import pytest

from src.cli import build_parser, render, status_line
from src.core.shared_types import GameMode, Player
from src.gomoku.board import Board
from src.gomoku.game import Game


def test_render_shows_stones() -> None:
    board = Board.empty(size=3).place(1, 1, Player.BLACK).place(0, 2, Player.WHITE)
    lines = render(board).splitlines()
    assert len(lines) == 4
    assert lines[0].split() == ["0", "1", "2"]
    assert lines[1].split() == ["0", "·", "·", "○"]
    assert lines[2].split() == ["1", "·", "●", "·"]


def test_status_line() -> None:
    game = Game()
    game.start(GameMode.PVP_LOCAL)
    assert status_line(game) == "black to move"
    for col in range(5):
        game.apply_move(0, col, Player.BLACK)
    assert status_line(game) == "black wins!"


def test_parser_modes() -> None:
    assert build_parser().parse_args(["ai"]).mode == "ai"
    with pytest.raises(SystemExit):
        build_parser().parse_args(["online"])


def test_parser_resume_takes_a_game_id() -> None:
    game_id = uuid4()
    args = build_parser().parse_args(["local", "--resume", str(game_id)])
    assert args.resume == game_id
    with pytest.raises(SystemExit):
        build_parser().parse_args(["local", "--resume", "not-a-uuid"])
