"""Configuration module."""

from clanker.config.loader import load_config
from clanker.config.schema import Config

__all__ = ["Config", "load_config"]
