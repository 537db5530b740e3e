"""Tests for techbadges.resolver."""

import pytest

from techbadges.errors import ErrorKind, ValidationError
from techbadges.registry import build_icon_sets
from techbadges.resolver import (
    resolve_icon_names,
    split_icon_param,
    validate_per_line,
    validate_theme,
)


def resolve(param, theme, index):
    return resolve_icon_names(param, theme, index.available_icons, index.themed_icons)


class TestSplitIconParam:
    """Tests for split_icon_param."""

    def test_trims_lowercases_and_drops_empty(self):
        assert split_icon_param(" JS, ,React,,docker ") == ["js", "react", "docker"]


class TestResolveIconNames:
    """Tests for resolve_icon_names."""

    def test_simple_names(self, icon_index):
        assert resolve("javascript,docker", None, icon_index) == ["javascript", "docker"]

    def test_aliases(self, icon_index):
        assert resolve("js,ts", None, icon_index) == ["javascript", "typescript"]

    def test_dark_theme_by_default(self, icon_index):
        assert resolve("react", None, icon_index) == ["react-dark"]

    def test_light_theme(self, icon_index):
        assert resolve("react,python", "light", icon_index) == ["react-light", "python-light"]

    def test_unknown_skipped(self, icon_index):
        assert resolve("javascript,unknown,docker", None, icon_index) == ["javascript", "docker"]

    def test_mixed_valid_and_invalid(self, icon_index):
        result = resolve("js, react, notreal, docker", "dark", icon_index)
        assert result == ["javascript", "react-dark", "docker"]

    def test_malformed_names_dropped(self, icon_index):
        result = resolve("docker,<script>,java_script,react", None, icon_index)
        assert result == ["docker", "react-dark"]

    def test_duplicates_kept_in_order(self, icon_index):
        assert resolve("docker,js,docker", None, icon_index) == ["docker", "javascript", "docker"]

    def test_all_unknown_returns_empty(self, icon_index):
        assert resolve("nope,missing", None, icon_index) == []

    def test_explicit_themed_key_is_not_a_base_name(self, icon_index):
        """A suffixed key is used as-is whatever the theme."""
        assert resolve("react-dark", "light", icon_index) == ["react-dark"]

    def test_empty_input(self, icon_index):
        with pytest.raises(ValidationError) as exc_info:
            resolve("", None, icon_index)
        assert exc_info.value.kind is ErrorKind.EMPTY_INPUT

    def test_only_commas_is_empty(self, icon_index):
        with pytest.raises(ValidationError) as exc_info:
            resolve(" , ,", None, icon_index)
        assert exc_info.value.kind is ErrorKind.EMPTY_INPUT

    def test_maximum_icons(self, icon_index):
        with pytest.raises(ValidationError, match="Maximum") as exc_info:
            resolve(",".join(["js"] * 101), None, icon_index)
        assert exc_info.value.kind is ErrorKind.TOO_MANY_ICONS

    def test_exactly_maximum_is_allowed(self, icon_index):
        assert len(resolve(",".join(["js"] * 100), None, icon_index)) == 100


class TestUnpairedThemedIcon:
    """A base with only a -dark variant is still treated as themed."""

    @pytest.fixture
    def index(self):
        return build_icon_sets(["solo-dark", "docker"])

    def test_resolves_under_default_theme(self, index):
        assert resolve("solo", None, index) == ["solo-dark"]

    def test_dropped_under_light_theme(self, index):
        assert resolve("solo,docker", "light", index) == ["docker"]


class TestValidateTheme:
    """Tests for validate_theme."""

    def test_none(self):
        assert validate_theme(None) is None

    @pytest.mark.parametrize("theme", ["dark", "light"])
    def test_valid(self, theme):
        assert validate_theme(theme) == theme

    @pytest.mark.parametrize("theme", ["blue", "DARK", "", " dark"])
    def test_invalid(self, theme):
        with pytest.raises(ValidationError, match='either "light" or "dark"') as exc_info:
            validate_theme(theme)
        assert exc_info.value.kind is ErrorKind.INVALID_THEME


class TestValidatePerLine:
    """Tests for validate_per_line."""

    def test_default(self):
        assert validate_per_line(None, 15) == 15

    @pytest.mark.parametrize("raw,expected", [("10", 10), ("1", 1), ("50", 50), ("7px", 7), (" 3", 3)])
    def test_valid(self, raw, expected):
        assert validate_per_line(raw, 15) == expected

    @pytest.mark.parametrize("raw", ["0", "51", "-1", "abc", ""])
    def test_invalid(self, raw):
        with pytest.raises(ValidationError, match="between 1 and 50") as exc_info:
            validate_per_line(raw, 15)
        assert exc_info.value.kind is ErrorKind.INVALID_PER_LINE
