"""clanker: a minimal terminal chat agent with file tools."""

__version__ = "0.1.0"
