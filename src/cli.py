"""Command-line entry point: play on one terminal, against a friend or the suggester."""

import argparse
import logging
from uuid import UUID

from src.core.config import configure_logging, load_settings
from src.core.exceptions import GameError, InvalidRequestError
from src.core.shared_types import Status
from src.db.database import create_db_engine, get_db
from src.db.sql_repository import SQLGameRepository
from src.gomoku.board import Board, Cell
from src.gomoku.game import Game, parse_coordinates
from src.services.game_service import GameService

logger = logging.getLogger(__name__)

CELL_SYMBOLS: dict[Cell, str] = {
    Cell.EMPTY: "·",
    Cell.BLACK: "●",
    Cell.WHITE: "○",
}


def render(board: Board) -> str:
    """Text board with column numbers on top and row numbers on the left."""
    header = "    " + " ".join(f"{col:>2}" for col in range(board.size))
    lines = [header]
    for row_idx, row in enumerate(board.cells):
        lines.append(f"{row_idx:>2}  " + " ".join(f"{CELL_SYMBOLS[cell]:>2}" for cell in row))
    return "\n".join(lines)


def status_line(game: Game) -> str:
    if game.status == Status.ENDED:
        return f"{game.winner} wins!" if game.winner else "Draw!"
    return f"{game.current_player} to move"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gomoku", description="Five in a row on a 15x15 board.")
    parser.add_argument(
        "mode",
        choices=["local", "ai"],
        help="two players on this terminal, or play Black against the suggester",
    )
    parser.add_argument("--resume", type=UUID, default=None, help="continue a saved game by its ID")
    parser.add_argument("--log-level", default=None, help="overrides GOMOKU_LOG_LEVEL")
    return parser


def main(argv: list[str] | None = None) -> None:  # pragma: no cover - interactive loop
    args = build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(args.log_level or settings.log_level)

    db_sessions = get_db(create_db_engine(settings.database_url))
    service = GameService(repository=SQLGameRepository(next(db_sessions)), settings=settings)
    game_id = args.resume
    if game_id is not None:
        service.load(game_id)
    elif args.mode == "ai":
        service.start_against_suggester()
    else:
        service.start_local()

    try:
        while True:
            service.wait_for_suggestions()
            print(render(service.game.board))
            print(status_line(service.game))
            try:
                command = input("row col / r(estart) / s(ave) / q(uit): ").strip().lower()
            except EOFError:
                return
            if command == "q":
                return
            if command == "r":
                service.restart()
                continue
            if command == "s":
                try:
                    game_id = service.save(game_id)
                except GameError as exc:
                    print(exc)
                    continue
                print(f"Saved as {game_id}")
                continue
            try:
                row, col = parse_coordinates(command)
            except InvalidRequestError as exc:
                print(exc)
                continue
            if service.click(row, col) is None:
                print("Move not allowed.")
    finally:
        service.shutdown()
        db_sessions.close()


if __name__ == "__main__":  # pragma: no cover
    main()
