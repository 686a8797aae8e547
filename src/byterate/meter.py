"""Byte counting and interval-driven rate reporting.

The :class:`ThroughputMeter` is the shared core of every stream wrapper. It
accumulates byte counts, checks an injectable monotonic clock on every
observation and hands a :class:`~byterate.units.BytesPerSecond` to its sink
each time the reporting interval has elapsed.

Meters built without an explicit interval use the default of the thread that
builds them, which :func:`set_interval` changes for that thread only.
"""

import threading
import warnings
from collections.abc import Callable
from datetime import timedelta
from time import monotonic

from .sinks import Sink, as_sink
from .units import BytesPerSecond

DEFAULT_INTERVAL_SECONDS = 1.0

_thread_defaults = threading.local()


def interval_seconds(interval: float | timedelta) -> float:
    """Convert a reporting interval to seconds and validate it.

    Args:
        interval (float | timedelta): Interval as seconds or a ``timedelta``.

    Returns:
        float: The interval in seconds.

    Raises:
        ValueError: If the interval is not a number or is not positive.
    """
    if isinstance(interval, timedelta):
        seconds = interval.total_seconds()
    elif isinstance(interval, (int, float)) and not isinstance(interval, bool):
        seconds = float(interval)
    else:
        raise ValueError(f"Reporting interval must be seconds or a timedelta, got {interval!r}")
    if not seconds > 0:
        raise ValueError("Reporting interval must be positive")
    return seconds


def get_interval() -> float:
    """Return the default reporting interval, in seconds, for the current thread."""
    return getattr(_thread_defaults, "interval", DEFAULT_INTERVAL_SECONDS)


def set_interval(interval: float | timedelta) -> None:
    """Set the default reporting interval for meters built on the current thread.

    Meters that already exist keep their interval. Other threads keep theirs.

    Raises:
        ValueError: If the interval is not a number or is not positive.
    """
    _thread_defaults.interval = interval_seconds(interval)


class ThroughputMeter:
    """Count bytes and report their rate once per interval.

    All work happens inline in :meth:`observe`; the meter never starts a thread
    or a timer. Counts that have not been reported when the meter is discarded
    are lost.

    Attributes:
        interval (float): Reporting interval in seconds.
        count (int): Bytes observed since the last report.
        total_bytes (int): Bytes observed since construction.
        last_report (float): Clock reading at construction or the last report.
    """

    def __init__(
        self,
        sink: object | None = None,
        *,
        interval: float | timedelta | None = None,
        monotonic_fn: Callable[[], float] | None = None,
    ) -> None:
        """Initialize a meter.

        Args:
            sink (object | None): Where reports go. A text stream, a callable
                taking a ``BytesPerSecond``, or a ``Ring``. ``None`` selects
                the process standard output.
            interval (float | timedelta | None): Minimum time between reports.
                ``None`` uses the current thread's default, see
                :func:`get_interval`.
            monotonic_fn (Callable[[], float] | None): Optional injected
                monotonic clock for testing.

        Raises:
            ValueError: If ``interval`` is not positive.
            TypeError: If ``sink`` cannot be used as a report sink.
        """
        self.interval = get_interval() if interval is None else interval_seconds(interval)
        self._sink: Sink = as_sink(sink)
        self._monotonic = monotonic_fn or monotonic
        self.count = 0
        self.total_bytes = 0
        self.last_report = self._monotonic()

    def observe(self, byte_count: int) -> BytesPerSecond | None:
        """Add ``byte_count`` bytes and report if the interval has elapsed.

        Args:
            byte_count (int): Bytes moved by the call being observed.

        Returns:
            BytesPerSecond | None: The measurement if a report boundary was
            crossed, otherwise ``None``.
        """
        self.count += byte_count
        self.total_bytes += byte_count
        now = self._monotonic()
        elapsed = now - self.last_report
        if elapsed < self.interval:
            return None
        measurement = BytesPerSecond(self.count, elapsed)
        try:
            self._sink(measurement)
        except Exception as e:
            warnings.warn(f"Failed to deliver throughput report ({measurement}): {e}", stacklevel=3)
        self.count = 0
        self.last_report = now
        return measurement

    def check(self) -> BytesPerSecond | None:
        """Run the interval check without adding bytes."""
        return self.observe(0)
