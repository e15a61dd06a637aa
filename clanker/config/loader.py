"""Configuration loader for clanker."""

from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError

from clanker.config.schema import Config
from clanker.errors import ConfigError

DEFAULT_ENV_FILE = Path(".env")


def load_config(env_file: Path | None = None, **overrides: Any) -> Config:
    """
    Load configuration from the environment and an optional dotenv file.

    Priority: explicit overrides > environment variables > dotenv file > defaults.

    Args:
        env_file: Dotenv file to read. Defaults to ``.env`` in the working
            directory; a missing file is skipped.
        overrides: Field values to force, typically from CLI options.
            ``None`` values are ignored.

    Returns:
        Loaded configuration.

    Raises:
        ConfigError: A value failed validation.
    """
    path = env_file or DEFAULT_ENV_FILE
    values = {key: value for key, value in overrides.items() if value is not None}

    try:
        config = Config(_env_file=path, **values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    if path.exists():
        logger.debug(f"Config loaded with env file {path}")
    return config
