"""Runtime settings, read from the environment (and a local .env file if present)."""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Gomoku board is always 15x15. Kept adjustable for tests and variants.
BOARD_SIZE = 15
WIN_LENGTH = 5

ROOM_ID_LENGTH = 5
DEFAULT_CHANNEL_PREFIX = "gomoku-"
DEFAULT_DATABASE_URL = "sqlite:///gomoku.db"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    channel_prefix: str = DEFAULT_CHANNEL_PREFIX
    log_level: str = "INFO"
    suggester_delay: float = 0.0


def load_settings() -> Settings:
    """Build Settings from GOMOKU_* environment variables."""
    load_dotenv()
    return Settings(
        database_url=os.getenv("GOMOKU_DATABASE_URL", DEFAULT_DATABASE_URL),
        channel_prefix=os.getenv("GOMOKU_CHANNEL_PREFIX", DEFAULT_CHANNEL_PREFIX),
        log_level=os.getenv("GOMOKU_LOG_LEVEL", "INFO").upper(),
        suggester_delay=float(os.getenv("GOMOKU_SUGGESTER_DELAY", "0")),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
