"""Resource loading utilities for techbadges.

Uses importlib.resources for package data access that works whether
installed normally, editable, or bundled.
"""

from functools import lru_cache
from importlib.resources import files

from techbadges.registry import IconRegistry, parse_registry_json


@lru_cache
def get_data_file(name: str) -> str:
    """Load a file from techbadges/data/.

    Args:
        name: Data filename (e.g., "icons.json")

    Returns:
        File content as string
    """
    return files("techbadges.data").joinpath(name).read_text(encoding="utf-8")


def get_sample_registry() -> IconRegistry:
    """The small icon registry bundled with the package."""
    return IconRegistry.from_mapping(
        parse_registry_json(get_data_file("icons.json"), source="techbadges/data/icons.json")
    )
