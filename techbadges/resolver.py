"""Icon name resolution and request parameter validation."""

import re
from typing import AbstractSet, Optional

from techbadges.config.aliases import resolve_alias
from techbadges.config.constants import (
    DEFAULT_THEME,
    ICON_NAME_PATTERN,
    MAX_ICONS_PER_LINE,
    MAX_ICONS_PER_REQUEST,
    MIN_ICONS_PER_LINE,
    THEMES,
)
from techbadges.errors import ErrorKind, ValidationError

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def split_icon_param(icon_param: str) -> list[str]:
    """Split a comma-separated parameter into trimmed, lower-cased tokens."""
    tokens = (part.strip().lower() for part in icon_param.split(","))
    return [token for token in tokens if token]


def resolve_icon_names(
    icon_param: str,
    theme: Optional[str],
    available_icons: AbstractSet[str],
    themed_icons: AbstractSet[str],
) -> list[str]:
    """Validate and resolve icon names from user input.

    Args:
        icon_param: Comma-separated list of icon names
        theme: "dark" or "light"; None means dark
        available_icons: All registry keys
        themed_icons: Base names that have -dark/-light variants

    Returns:
        Registry keys in request order. Malformed and unknown names are
        dropped without error, so the result may be shorter than the input
        or empty.

    Raises:
        ValidationError: If no names were given or too many were given
    """
    requested = split_icon_param(icon_param)

    if not requested:
        raise ValidationError(ErrorKind.EMPTY_INPUT)

    if len(requested) > MAX_ICONS_PER_REQUEST:
        raise ValidationError(ErrorKind.TOO_MANY_ICONS)

    effective_theme = theme or DEFAULT_THEME
    resolved = []

    for name in requested:
        # Reject anything that could smuggle markup into the document
        if not ICON_NAME_PATTERN.fullmatch(name):
            continue

        base_name = resolve_alias(name)

        if base_name in themed_icons:
            themed_name = f"{base_name}-{effective_theme}"
            if themed_name in available_icons:
                resolved.append(themed_name)
        elif base_name in available_icons:
            resolved.append(base_name)

    return resolved


def validate_theme(theme: Optional[str]) -> Optional[str]:
    """Validate the theme parameter.

    Returns None when absent so the caller applies the default.
    """
    if theme is None:
        return None

    if theme in THEMES:
        return theme

    raise ValidationError(ErrorKind.INVALID_THEME)


def validate_per_line(per_line: Optional[str], default: int) -> int:
    """Validate and parse the perline parameter.

    Parsing takes the leading base-10 integer, so "10px" is 10 and
    "abc" is invalid.
    """
    if per_line is None:
        return default

    match = _LEADING_INT.match(per_line)
    if not match:
        raise ValidationError(ErrorKind.INVALID_PER_LINE)

    value = int(match.group(1))
    if not MIN_ICONS_PER_LINE <= value <= MAX_ICONS_PER_LINE:
        raise ValidationError(ErrorKind.INVALID_PER_LINE)

    return value
