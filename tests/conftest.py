"""Shared test fixtures for the notionblocks test suite."""

from __future__ import annotations

import pytest

from notionblocks.config import NotionBlocksConfig
from notionblocks.converter.md_to_notion import MarkdownToNotionConverter


class RecordingMetricsHook:
    """Metrics hook that keeps every data point for later assertions."""

    def __init__(self) -> None:
        self.counters: list[tuple[str, int, dict | None]] = []
        self.timings: list[tuple[str, float, dict | None]] = []

    def increment(self, name, value=1, tags=None):
        self.counters.append((name, value, tags))

    def timing(self, name, ms, tags=None):
        self.timings.append((name, ms, tags))

    def total(self, name: str) -> int:
        return sum(value for n, value, _ in self.counters if n == name)


@pytest.fixture
def config() -> NotionBlocksConfig:
    """Default test configuration."""
    return NotionBlocksConfig()


@pytest.fixture
def converter(config: NotionBlocksConfig) -> MarkdownToNotionConverter:
    """Markdown-to-Notion converter using the default test config."""
    return MarkdownToNotionConverter(config)


@pytest.fixture
def metrics() -> RecordingMetricsHook:
    return RecordingMetricsHook()
