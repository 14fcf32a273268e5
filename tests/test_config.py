"""Tests for RenderConfig.

The from_dict() method lets callers build options from loaded settings.
"""

from __future__ import annotations

import dataclasses

import pytest

from orgrender.config import DEFAULT_CONFIG, RenderConfig


class TestRenderConfigDataclass:
    """Test RenderConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        """Default config has every export option disabled."""
        config = RenderConfig()
        assert config.decorate_title is False
        assert config.skip_tables is False
        assert config.use_sub_superscripts is False
        assert config.export_footnotes is False
        assert config.export_heading_number is False
        assert config.export_todo_keyword is False

    def test_immutability(self) -> None:
        """Config is frozen and cannot be modified."""
        config = RenderConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.skip_tables = True  # type: ignore[misc]

    def test_default_config_is_defaults(self) -> None:
        assert DEFAULT_CONFIG == RenderConfig()


class TestRenderConfigFromDict:
    """Test RenderConfig.from_dict() factory method."""

    def test_from_dict_basic(self) -> None:
        """from_dict should create config with specified values."""
        config = RenderConfig.from_dict({"export_footnotes": True, "skip_tables": True})

        assert config.export_footnotes is True
        assert config.skip_tables is True
        # Defaults should still apply
        assert config.decorate_title is False

    def test_from_dict_ignores_unknown_keys(self) -> None:
        """from_dict should silently ignore unknown keys."""
        config = RenderConfig.from_dict({"export_heading_number": True, "theme": "dark"})
        assert config.export_heading_number is True
        assert not hasattr(config, "theme")

    def test_from_dict_empty(self) -> None:
        assert RenderConfig.from_dict({}) == DEFAULT_CONFIG
