"""Measure and report the throughput of readable, writable and iterable streams.

Wrap a stream with :func:`track` and use the wrapper in its place; every
second (by default) the rate of bytes moved through it is written to standard
output::

    import shutil
    import byterate

    shutil.copyfileobj(byterate.track(source), destination)
"""

from .meter import ThroughputMeter, get_interval, set_interval
from .ring import Ring
from .sinks import StreamSink, as_sink, stderr_sink, stdout_sink
from .units import BytesPerSecond, format_bytes, format_rate
from .wrappers import ThroughputIterator, ThroughputReader, ThroughputWriter, track

__all__ = [
    "BytesPerSecond",
    "Ring",
    "StreamSink",
    "ThroughputIterator",
    "ThroughputMeter",
    "ThroughputReader",
    "ThroughputWriter",
    "__version__",
    "as_sink",
    "format_bytes",
    "format_rate",
    "get_interval",
    "set_interval",
    "stderr_sink",
    "stdout_sink",
    "track",
]
__version__ = "0.1.0"
