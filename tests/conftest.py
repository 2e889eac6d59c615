"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.core.shared_types import Player
from src.db.schema import Base
from src.gomoku.board import Board
from src.session.transport import MemoryHub, MemoryTransport

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def settings() -> Settings:
    """Settings that never touch the environment or the file system."""
    return Settings(database_url=DATABASE_URL, channel_prefix="test-", log_level="DEBUG")


@pytest.fixture
def hub() -> MemoryHub:
    return MemoryHub()


@pytest.fixture
def transport_pair(hub: MemoryHub) -> tuple[MemoryTransport, MemoryTransport]:
    """Two transports sharing a hub: (host side, guest side)"""
    return MemoryTransport(hub), MemoryTransport(hub)


@pytest.fixture
def board_from_stones() -> Callable[[list[tuple[int, int]], list[tuple[int, int]]], Board]:
    """Call the inner function with the squares of the black stones and of the white stones."""

    def _create_board(black: list[tuple[int, int]], white: list[tuple[int, int]]) -> Board:
        board = Board.empty()
        for row, col in black:
            board = board.place(row, col, Player.BLACK)
        for row, col in white:
            board = board.place(row, col, Player.WHITE)
        return board

    return _create_board
