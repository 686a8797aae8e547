"""Pass-through wrappers that measure the throughput of streams.

Each wrapper forwards its primary operations to the wrapped object unchanged
and feeds the number of bytes moved into a :class:`~byterate.meter.ThroughputMeter`.
Anything a wrapper does not intercept (``fileno``, ``seek``, ``name``,
``closed`` and so on) is looked up on the wrapped object.
"""

from collections.abc import Callable, Iterable, Iterator
from datetime import timedelta
from typing import Any

from .meter import ThroughputMeter


def byte_length(data: Any) -> int:
    """Return the number of bytes in a chunk returned by a stream.

    ``str`` chunks from text streams are counted by their UTF-8 length.
    """
    if data is None:
        return 0
    if isinstance(data, str):
        return len(data.encode("utf-8"))
    return memoryview(data).nbytes


def item_size(item: Any) -> int:
    """Return the byte contribution of one item produced by an iterator.

    Args:
        item (Any): An ``int`` byte value, a bytes-like object, or a ``str``.

    Returns:
        int: 1 for an ``int``, otherwise the item's length in bytes.

    Raises:
        TypeError: If the item has no obvious byte size. Pass ``size_fn`` to
            the iterator wrapper to measure other item types.
    """
    if isinstance(item, int):
        return 1
    if isinstance(item, str):
        return len(item.encode("utf-8"))
    try:
        return memoryview(item).nbytes
    except TypeError:
        raise TypeError(
            f"Cannot determine the byte size of {type(item).__name__} items; pass size_fn"
        ) from None


class _Tracked:
    """Shared construction and attribute delegation for stream wrappers."""

    def __init__(
        self,
        stream: Any,
        sink: object | None = None,
        *,
        interval: float | timedelta | None = None,
        monotonic_fn: Callable[[], float] | None = None,
    ) -> None:
        self.stream = stream
        self.meter = ThroughputMeter(sink, interval=interval, monotonic_fn=monotonic_fn)

    def __getattr__(self, name: str) -> Any:
        # Only called for attributes not found on the wrapper itself.
        if name == "stream":
            raise AttributeError(name)
        return getattr(self.stream, name)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self.stream, "close", None)
        if close is not None:
            close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.stream!r})"


class ThroughputReader(_Tracked):
    """Wrap a readable stream and report how fast it is read.

    Reads return exactly what the wrapped stream returns, including short
    reads, empty results at end of stream and exceptions.
    """

    def readable(self) -> bool:
        readable = getattr(self.stream, "readable", None)
        return True if readable is None else readable()

    def read(self, size: int = -1):
        data = self.stream.read(size)
        self.meter.observe(byte_length(data))
        return data

    def read1(self, size: int = -1):
        read1 = getattr(self.stream, "read1", None)
        data = read1(size) if read1 is not None else self.stream.read(size)
        self.meter.observe(byte_length(data))
        return data

    def readinto(self, buffer) -> int | None:
        count = self.stream.readinto(buffer)
        self.meter.observe(count or 0)
        return count

    def readline(self, size: int = -1):
        line = self.stream.readline(size)
        self.meter.observe(byte_length(line))
        return line

    def readlines(self, hint: int = -1) -> list:
        lines = self.stream.readlines(hint)
        self.meter.observe(sum(byte_length(line) for line in lines))
        return lines

    def __iter__(self) -> "ThroughputReader":
        return self

    def __next__(self):
        line = self.readline()
        if not line:
            raise StopIteration
        return line


class ThroughputWriter(_Tracked):
    """Wrap a writable stream and report how fast it is written.

    ``write`` returns the wrapped stream's result unchanged. Only the count the
    wrapped stream reports is measured, so partial writes are counted as
    partial and a ``None`` result counts as nothing written. Characters written
    to a text stream are counted by their UTF-8 length.
    """

    def writable(self) -> bool:
        writable = getattr(self.stream, "writable", None)
        return True if writable is None else writable()

    def write(self, data):
        written = self.stream.write(data)
        if not isinstance(written, int):
            self.meter.observe(0)
        elif isinstance(data, str):
            # Text streams report characters; count their UTF-8 bytes like reads do.
            self.meter.observe(byte_length(data[:written]))
        else:
            self.meter.observe(written)
        return written

    def writelines(self, lines: Iterable) -> None:
        lines = list(lines)
        self.stream.writelines(lines)
        self.meter.observe(sum(byte_length(line) for line in lines))

    def flush(self) -> None:
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()


class ThroughputIterator:
    """Wrap an iterable and report how fast its items are consumed.

    Items are yielded unchanged. Each item adds ``size_fn(item)`` bytes to the
    count. Exhaustion runs one last interval check and never forces a report.
    """

    def __init__(
        self,
        iterable: Iterable,
        sink: object | None = None,
        *,
        interval: float | timedelta | None = None,
        monotonic_fn: Callable[[], float] | None = None,
        size_fn: Callable[[Any], int] | None = None,
    ) -> None:
        self._iterator: Iterator = iter(iterable)
        self._size = size_fn or item_size
        self._exhausted = False
        self.meter = ThroughputMeter(sink, interval=interval, monotonic_fn=monotonic_fn)

    def __iter__(self) -> "ThroughputIterator":
        return self

    def __next__(self):
        if self._exhausted:
            raise StopIteration
        try:
            item = next(self._iterator)
        except StopIteration:
            self._exhausted = True
            self.meter.check()
            raise
        self.meter.observe(self._size(item))
        return item


def _is_readable(stream: Any) -> bool:
    if not callable(getattr(stream, "read", None)):
        return False
    readable = getattr(stream, "readable", None)
    return readable is None or bool(readable())


def track(
    stream: Any,
    sink: object | None = None,
    *,
    interval: float | timedelta | None = None,
    monotonic_fn: Callable[[], float] | None = None,
    size_fn: Callable[[Any], int] | None = None,
) -> ThroughputReader | ThroughputWriter | ThroughputIterator:
    """Wrap ``stream`` in the wrapper matching its capability.

    Readable streams take precedence over writable ones, and both over plain
    iterables, so a file opened for reading is measured per ``read`` rather
    than per line.

    Args:
        stream (Any): A readable, writable, or iterable object.
        sink (object | None): Report sink; see :func:`byterate.sinks.as_sink`.
        interval (float | timedelta | None): Reporting interval. ``None`` uses
            the current thread's default, one second unless changed with
            :func:`byterate.meter.set_interval`.
        monotonic_fn (Callable[[], float] | None): Optional injected clock.
        size_fn (Callable[[Any], int] | None): Item sizer for iterables.

    Returns:
        The wrapper instance.

    Raises:
        TypeError: If ``stream`` is neither readable, writable nor iterable.
        ValueError: If ``interval`` is not positive.

    Example:
        >>> import io, shutil
        >>> shutil.copyfileobj(track(io.BytesIO(b"abc")), io.BytesIO())
    """
    if _is_readable(stream):
        return ThroughputReader(stream, sink, interval=interval, monotonic_fn=monotonic_fn)
    if callable(getattr(stream, "write", None)):
        return ThroughputWriter(stream, sink, interval=interval, monotonic_fn=monotonic_fn)
    try:
        iter(stream)
    except TypeError:
        raise TypeError(
            f"{type(stream).__name__} is not readable, writable or iterable"
        ) from None
    return ThroughputIterator(
        stream, sink, interval=interval, monotonic_fn=monotonic_fn, size_fn=size_fn
    )
