"""Shared test fixtures for the content_reader test suite."""

from __future__ import annotations

from typing import Any

import pytest

from content_reader.config import ConverterConfig
from content_reader.converter.context import ConversionContext
from content_reader.converter.md_to_document import MarkdownConverter


class RecordingMetricsHook:
    """A metrics backend that records all calls for assertion."""

    def __init__(self) -> None:
        self.increments: list[dict[str, Any]] = []
        self.timings: list[dict[str, Any]] = []

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.increments.append({"name": name, "value": value, "tags": tags})

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        self.timings.append({"name": name, "ms": ms, "tags": tags})


@pytest.fixture
def config() -> ConverterConfig:
    """Default converter configuration."""
    return ConverterConfig()


@pytest.fixture
def ctx(config: ConverterConfig) -> ConversionContext:
    """Fresh conversion context using the default config."""
    return ConversionContext(config)


@pytest.fixture
def converter(config: ConverterConfig) -> MarkdownConverter:
    """Markdown converter using the default config."""
    return MarkdownConverter(config)


@pytest.fixture
def metrics() -> RecordingMetricsHook:
    return RecordingMetricsHook()
