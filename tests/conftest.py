"""Shared pytest fixtures for techbadges tests."""

import json

import pytest

from techbadges.registry import IconRegistry, build_icon_sets

ICON_KEYS = [
    "javascript",
    "typescript",
    "react-dark",
    "react-light",
    "python-dark",
    "python-light",
    "docker",
]


@pytest.fixture
def icon_keys():
    """Registry keys with standalone and themed icons."""
    return list(ICON_KEYS)


@pytest.fixture
def icon_index(icon_keys):
    """Index built from icon_keys."""
    return build_icon_sets(icon_keys)


@pytest.fixture
def sample_icons():
    """Registry markup keyed like icon_keys, plus a github pair."""
    icons = {key: f'<svg viewBox="0 0 256 256"><rect id="{key}"/></svg>' for key in ICON_KEYS}
    icons["github-dark"] = '<svg viewBox="0 0 256 256"><path fill="#fff"/></svg>'
    icons["github-light"] = '<svg viewBox="0 0 256 256"><path fill="#000"/></svg>'
    return icons


@pytest.fixture
def sample_registry(sample_icons):
    """IconRegistry over sample_icons."""
    return IconRegistry.from_mapping(sample_icons)


@pytest.fixture
def registry_file(tmp_path, sample_icons):
    """sample_icons written as an icons.json file."""
    path = tmp_path / "icons.json"
    path.write_text(json.dumps(sample_icons))
    return path
