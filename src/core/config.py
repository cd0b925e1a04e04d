"""
Runtime settings and logging setup.

Values are read from the environment. A `.env` file in the working directory gets loaded first (python-dotenv),
without overriding variables that are already set.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from src.core.exceptions import ConfigError

ENV_POSES_CSV = "YOGA_BOARD_POSES_CSV"
ENV_VIEWPORT_WIDTH = "YOGA_BOARD_VIEWPORT_WIDTH"
ENV_LOG_LEVEL = "YOGA_BOARD_LOG_LEVEL"

DEFAULT_POSES_CSV = "data/poses.csv"
DEFAULT_VIEWPORT_WIDTH = 1400
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    poses_csv: Path
    viewport_width: int
    log_level: str


def load_settings(env_file: str | None = None) -> Settings:
    """Build Settings from environment variables (and optional .env file)."""
    load_dotenv(dotenv_path=env_file)

    poses_csv = Path(os.getenv(ENV_POSES_CSV, DEFAULT_POSES_CSV))

    raw_width = os.getenv(ENV_VIEWPORT_WIDTH, str(DEFAULT_VIEWPORT_WIDTH))
    try:
        viewport_width = int(raw_width)
    except ValueError as exc:
        raise ConfigError(
            f"{ENV_VIEWPORT_WIDTH} must be an integer, got {raw_width!r}"
        ) from exc
    if viewport_width < 0:
        raise ConfigError(f"{ENV_VIEWPORT_WIDTH} cannot be negative: {viewport_width}")

    log_level = os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()
    if log_level not in logging.getLevelNamesMapping():
        raise ConfigError(f"Unknown log level {log_level!r}")

    return Settings(
        poses_csv=poses_csv, viewport_width=viewport_width, log_level=log_level
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Called once by the application root. Modules only ever do logging.getLogger(__name__)."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
