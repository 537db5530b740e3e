"""Tests for techbadges resources module."""

import json

from techbadges.resources import get_data_file, get_sample_registry


class TestGetDataFile:
    """Tests for get_data_file function."""

    def test_icons_json(self):
        """Test loading the bundled icons.json."""
        data = json.loads(get_data_file("icons.json"))
        assert "javascript" in data
        assert all(markup.startswith("<svg") for markup in data.values())


class TestSampleRegistry:
    """Tests for the bundled sample registry."""

    def test_loads(self):
        registry = get_sample_registry()
        assert len(registry) > 0

    def test_themed_icons(self):
        index = get_sample_registry().index
        assert "react" in index.themed_icons
        assert "react-dark" in index.available_icons
        assert "docker" not in index.themed_icons
