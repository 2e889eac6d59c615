"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(
            id=new_id,
            board=game.board,
            moves=list(game.moves),
            mode=game.mode,
            status=game.status,
            current_player=game.current_player,
            winner=game.winner,
            winning_line=[list(square) for square in game.winning_line],
        )
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        logger.info("Stored new game %s", new_id)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite an existing record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_db.board = game.board
        game_db.moves = list(game.moves)
        game_db.mode = game.mode
        game_db.status = game.status
        game_db.current_player = game.current_player
        game_db.winner = game.winner
        game_db.winning_line = [list(square) for square in game.winning_line]
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def list_games(self) -> list[UUID]:
        query = select(DBGame.id).order_by(DBGame.created_at)
        return list(self.db.scalars(query))

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            board=game_db.board,
            moves=list(game_db.moves),
            mode=game_db.mode,
            status=game_db.status,
            current_player=game_db.current_player,
            winner=game_db.winner,
            winning_line=[list(square) for square in game_db.winning_line],
        )
