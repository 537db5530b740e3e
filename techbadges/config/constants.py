"""Application constants."""

import re
from dataclasses import dataclass
from typing import Optional

# Grid density
ICONS_PER_LINE = 15
MIN_ICONS_PER_LINE = 1
MAX_ICONS_PER_LINE = 50

MAX_ICONS_PER_REQUEST = 100

# Geometry. Icon artwork is authored on a 256-unit canvas, laid out on a
# 300-unit pitch and displayed at 48px.
ONE_ICON = 48
GRID_CELL = 300
GRID_GAP = 44
SCALE = ONE_ICON / (GRID_CELL - GRID_GAP)

ICON_NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")

THEMES = ("dark", "light")
DEFAULT_THEME = "dark"


@dataclass(frozen=True)
class CacheConfig:
    """HTTP cache policy for one kind of response."""

    max_age: int
    stale_while_revalidate: Optional[int] = None
    immutable: bool = False


CACHE_CONFIG = {
    "icons": CacheConfig(max_age=86400, stale_while_revalidate=604800),  # 1 day / 1 week
    "api_icons": CacheConfig(max_age=3600, stale_while_revalidate=86400),
    "api_svgs": CacheConfig(max_age=3600, stale_while_revalidate=86400),
}

# Generated documents kept in the backing cache for one day
SVG_CACHE_TTL = 86400
