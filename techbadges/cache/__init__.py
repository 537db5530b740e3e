"""Backing caches for generated documents.

Usage:
    from techbadges.cache import SvgCache, create_cache_backend

    backend = create_cache_backend(config)
    svg_cache = SvgCache(backend, ttl=config.svg_cache_ttl) if backend else None
"""

from typing import TYPE_CHECKING, Optional

from .base import CacheBackend
from .memory import MemoryCache
from .redis_cache import RedisCache
from .svg_cache import SvgCache, generate_cache_key, with_cache

if TYPE_CHECKING:
    from techbadges.config.settings import ServerConfig


def create_cache_backend(config: "ServerConfig") -> Optional[CacheBackend]:
    """Build the backend named by config.cache_backend ("none" gives None)."""
    if config.cache_backend == "memory":
        return MemoryCache(max_entries=config.memory_cache_size)
    if config.cache_backend == "redis":
        return RedisCache(config.redis_url)
    if config.cache_backend == "none":
        return None
    raise ValueError(f"Unknown cache backend: {config.cache_backend}")


def create_svg_cache(config: "ServerConfig") -> Optional[SvgCache]:
    """Build the SvgCache for a server configuration, if caching is enabled."""
    backend = create_cache_backend(config)
    if backend is None:
        return None
    return SvgCache(backend, ttl=config.svg_cache_ttl)


__all__ = [
    "CacheBackend",
    "MemoryCache",
    "RedisCache",
    "SvgCache",
    "create_cache_backend",
    "create_svg_cache",
    "generate_cache_key",
    "with_cache",
]
