"""Metrics hook protocol and no-op default implementation.

notionblocks emits counters and timings at the end of every conversion.  By
default a :class:`NoopMetricsHook` is used so there is zero overhead.  Users
can supply their own implementation that satisfies the :class:`MetricsHook`
protocol to route metrics to Datadog, Prometheus, StatsD, or any other
backend.

Usage::

    from notionblocks import NotionBlocksConfig, convert

    result = convert(markdown, NotionBlocksConfig(metrics=my_backend))

Emitted metric names:

* ``notionblocks.blocks_created_total``        -- counter
* ``notionblocks.batches_total``               -- counter
* ``notionblocks.conversion_warnings_total``   -- counter, tagged by ``code``
* ``notionblocks.conversion_duration_ms``      -- timing
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    All methods accept an optional *tags* dict whose keys and values are
    strings.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...


class NoopMetricsHook:
    """Default metrics implementation that silently discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
