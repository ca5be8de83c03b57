"""Tests for config.py"""

from __future__ import annotations

import pytest

from content_reader.config import DEFAULT_DATA_LANGUAGES, ConverterConfig


class TestConverterConfig:

    def test_defaults(self):
        config = ConverterConfig()
        assert config.max_nesting_depth == 32
        assert config.hoist_images is True
        assert config.merge_adjacent_text is True
        assert config.data_languages == DEFAULT_DATA_LANGUAGES
        assert config.metrics is None
        assert config.debug_dump_tokens is False
        assert config.debug_dump_document is False

    def test_data_languages_lowercased(self):
        assert ConverterConfig(data_languages=["JSON", "Yaml"]).data_languages == ("json", "yaml")

    def test_data_languages_string_rejected(self):
        with pytest.raises(ValueError, match="data_languages"):
            ConverterConfig(data_languages="json")  # type: ignore[arg-type]

    @pytest.mark.parametrize("depth", [0, -1])
    def test_invalid_depth(self, depth):
        with pytest.raises(ValueError, match="max_nesting_depth"):
            ConverterConfig(max_nesting_depth=depth)

    def test_minimum_depth(self):
        assert ConverterConfig(max_nesting_depth=1).max_nesting_depth == 1
