"""Keyed cache of generated SVG documents.

Documents are cached by a digest of the normalized request parameters.
Rendering is deterministic, so a hit is always safe to serve. Backend
failures are logged and treated as misses: a broken cache must never
fail a request.
"""

import hashlib
import json
import logging
from typing import Callable, Optional

from techbadges.cache.base import CacheBackend
from techbadges.config.constants import DEFAULT_THEME, ICONS_PER_LINE, SVG_CACHE_TTL

logger = logging.getLogger(__name__)

CACHE_PREFIX = "svg:"


def generate_cache_key(icons: str, theme: Optional[str] = None, per_line: Optional[int] = None) -> str:
    """Cache key for a set of request parameters.

    Tokens are trimmed and lower-cased but keep their order, since order
    decides each icon's position in the grid.
    """
    normalized = {
        "i": ",".join(token.strip() for token in icons.lower().split(",")),
        "t": theme or DEFAULT_THEME,
        "p": per_line if per_line is not None else ICONS_PER_LINE,
    }
    payload = json.dumps(normalized, sort_keys=True)
    return CACHE_PREFIX + hashlib.sha256(payload.encode("utf-8")).hexdigest()[:24]


class SvgCache:
    """Wraps a CacheBackend with parameter-keyed get/set/invalidate."""

    def __init__(self, backend: CacheBackend, ttl: int = SVG_CACHE_TTL):
        self.backend = backend
        self.ttl = ttl

    async def get(self, icons: str, theme: Optional[str] = None, per_line: Optional[int] = None) -> Optional[str]:
        """Return the cached document, or None on a miss or backend error."""
        key = generate_cache_key(icons, theme, per_line)
        try:
            return await self.backend.get(key)
        except Exception:
            logger.exception("Cache get failed for %s", key)
            return None

    async def set(self, icons: str, svg: str, theme: Optional[str] = None, per_line: Optional[int] = None) -> None:
        """Store a generated document."""
        key = generate_cache_key(icons, theme, per_line)
        try:
            await self.backend.put(key, svg, self.ttl)
        except Exception:
            logger.exception("Cache set failed for %s", key)

    async def invalidate(self, icons: str, theme: Optional[str] = None, per_line: Optional[int] = None) -> None:
        """Drop a cached document."""
        key = generate_cache_key(icons, theme, per_line)
        try:
            await self.backend.delete(key)
        except Exception:
            logger.exception("Cache delete failed for %s", key)


async def with_cache(
    cache: Optional[SvgCache],
    icons: str,
    theme: Optional[str],
    per_line: Optional[int],
    generate: Callable[[], str],
) -> tuple[str, bool]:
    """Serve a document from cache, generating and storing it on a miss.

    Returns:
        (svg, cached) where cached tells whether the document was a hit
    """
    if cache is None:
        return generate(), False

    cached = await cache.get(icons, theme, per_line)
    if cached is not None:
        return cached, True

    svg = generate()
    await cache.set(icons, svg, theme, per_line)
    return svg, False
