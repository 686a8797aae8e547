"""Report sinks that receive rate measurements.

A sink is any callable taking a :class:`~byterate.units.BytesPerSecond`.
:func:`as_sink` builds one from the objects callers usually have at hand: a
text stream, a plain function, or a :class:`~byterate.ring.Ring`.
"""

import sys
from collections.abc import Callable
from typing import TextIO

from .ring import Ring
from .units import BytesPerSecond

Sink = Callable[[BytesPerSecond], object]


class StreamSink:
    """Write each measurement as one line of text, e.g. ``"28.06 GiB/s\\n"``."""

    def __init__(self, stream: TextIO, *, flush: bool = True) -> None:
        self.stream = stream
        self.flush = flush

    def __call__(self, measurement: BytesPerSecond) -> None:
        self.stream.write(f"{measurement}\n")
        if self.flush:
            self.stream.flush()


class RingSink:
    """Push each measurement into a :class:`Ring` for another thread to drain."""

    def __init__(self, ring: Ring) -> None:
        self.ring = ring

    def __call__(self, measurement: BytesPerSecond) -> None:
        # A full ring that rejects the newest item is not an error here.
        self.ring.push(measurement)


def stdout_sink() -> StreamSink:
    """Return a sink bound to the current ``sys.stdout``."""
    return StreamSink(sys.stdout)


def stderr_sink() -> StreamSink:
    """Return a sink bound to the current ``sys.stderr``."""
    return StreamSink(sys.stderr)


def as_sink(target: object | None) -> Sink:
    """Coerce ``target`` into a report sink.

    Args:
        target (object | None): ``None`` for standard output, a ``Ring``, an
            object with a ``write`` method, or a callable accepting a
            ``BytesPerSecond``.

    Returns:
        Sink: A callable that delivers one measurement.

    Raises:
        TypeError: If ``target`` is none of the supported kinds.
    """
    if target is None:
        return stdout_sink()
    if isinstance(target, Ring):
        return RingSink(target)
    if isinstance(target, (StreamSink, RingSink)):
        return target
    if callable(getattr(target, "write", None)):
        return StreamSink(target)  # type: ignore[arg-type]
    if callable(target):
        return target  # type: ignore[return-value]
    raise TypeError(f"Cannot use {type(target).__name__} as a report sink")
