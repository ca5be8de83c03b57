"""Metrics hook protocol and its no-op default.

The converter reports a handful of counters and one timing per call.
Without a configured backend a :class:`NoopMetricsHook` is used, so call
sites never need to check for ``None``.  Any object with matching
``increment`` and ``timing`` methods satisfies :class:`MetricsHook`.

Emitted metric names:

* ``content_reader.conversions_total``          -- counter
* ``content_reader.blocks_emitted_total``       -- counter
* ``content_reader.conversion_warnings_total``  -- counter (tag ``code``)
* ``content_reader.conversion_duration_ms``     -- timing
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol a metrics backend must satisfy.

    *tags* are string key/value pairs; backends map them onto whatever
    labelling scheme they support.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment the counter *name* by *value*."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration of *ms* milliseconds under *name*."""
        ...


class NoopMetricsHook:
    """Metrics backend that discards every data point."""

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
