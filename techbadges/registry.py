"""Icon registry loading and indexing.

The registry maps icon keys ("react-dark", "docker") to SVG markup. It is
loaded once at startup and indexed into an IconIndex, which the resolver
and server receive explicitly.
"""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

logger = logging.getLogger(__name__)

THEME_SUFFIX = re.compile(r"-(dark|light)$")


def strip_theme(key: str) -> str:
    """Remove a trailing -dark/-light suffix from a registry key."""
    return THEME_SUFFIX.sub("", key)


@dataclass(frozen=True)
class IconIndex:
    """Lookup sets derived from the registry keys."""

    available_icons: frozenset[str]
    themed_icons: frozenset[str]
    icon_name_list: tuple[str, ...]
    keys: tuple[str, ...] = ()  # registry keys in registry order

    def all_icons_param(self) -> str:
        """Expansion of the special "all" identifier.

        Every key except light variants, comma-joined, so each themed icon
        appears once. Suffixed keys are used as-is by the resolver.
        """
        return ",".join(key for key in self.keys if not key.endswith("-light"))


def build_icon_sets(icon_keys: Iterable[str]) -> IconIndex:
    """Build available/themed sets and the base name list from registry keys.

    A base name counts as themed as soon as one suffixed variant exists;
    a lone "-dark" key is enough.
    """
    keys = tuple(icon_keys)
    themed = set()
    names: dict[str, None] = {}  # insertion-ordered set

    for key in keys:
        base = strip_theme(key)
        if base != key:
            themed.add(base)
        names.setdefault(base, None)

    return IconIndex(
        available_icons=frozenset(keys),
        themed_icons=frozenset(themed),
        icon_name_list=tuple(names),
        keys=keys,
    )


@dataclass(frozen=True)
class IconRegistry:
    """Icon markup plus its index."""

    icons: Mapping[str, str]
    index: IconIndex

    @classmethod
    def from_mapping(cls, icons: Mapping[str, str]) -> "IconRegistry":
        icons = dict(icons)
        return cls(icons=icons, index=build_icon_sets(icons.keys()))

    def __len__(self) -> int:
        return len(self.icons)


def load_registry(path: Path) -> IconRegistry:
    """Load a registry from a JSON file or a directory of SVG files.

    Args:
        path: Either a .json file containing {key: svg_markup}, or a
            directory whose *.svg files are keyed by lower-cased stem.

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the JSON is not an object of strings
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Icon registry not found: {path}")

    if path.is_dir():
        icons = _read_svg_dir(path)
    else:
        icons = parse_registry_json(path.read_text(encoding="utf-8"), source=str(path))

    logger.info("Loaded %d icons from %s", len(icons), path)
    return IconRegistry.from_mapping(icons)


def parse_registry_json(content: str, source: str = "<registry>") -> dict[str, str]:
    """Parse a {key: svg_markup} JSON document."""
    data = json.loads(content)
    if not isinstance(data, dict):
        raise ValueError(f"{source}: expected a JSON object of icon key -> SVG markup")

    icons = {}
    for key, markup in data.items():
        if not isinstance(markup, str):
            raise ValueError(f"{source}: icon '{key}' is not a string")
        icons[key.lower()] = markup
    return icons


def _read_svg_dir(directory: Path) -> dict[str, str]:
    icons = {}
    for svg_path in sorted(directory.glob("*.svg")):
        icons[svg_path.stem.lower()] = svg_path.read_text(encoding="utf-8")
    return icons
