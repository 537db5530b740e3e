"""Static configuration: constants, alias table and server settings."""

from .aliases import ALIASES, aliases_for, resolve_alias
from .constants import CACHE_CONFIG, CacheConfig
from .settings import ServerConfig

__all__ = [
    "ALIASES",
    "CACHE_CONFIG",
    "CacheConfig",
    "ServerConfig",
    "aliases_for",
    "resolve_alias",
]
