"""Endless and discarding streams for benchmarks and tests.

``RepeatReader`` produces the same byte forever and ``NullWriter`` swallows
everything written to it, so a copy between the two measures nothing but the
cost of the copy loop and the wrapper itself.
"""


class RepeatReader:
    """A readable stream that never ends, yielding one repeated byte value.

    Attributes:
        byte (int): The byte value produced, 0-255.
        default_size (int): Bytes returned by ``read()`` with no size.
    """

    def __init__(self, byte: int = 0, default_size: int = 8192) -> None:
        if not 0 <= byte <= 255:
            raise ValueError("byte must be in range 0-255")
        self.byte = byte
        self.default_size = default_size
        self.closed = False

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        # An endless stream cannot be read to the end.
        if size is None or size < 0:
            size = self.default_size
        return bytes([self.byte]) * size

    def readinto(self, buffer) -> int:
        view = memoryview(buffer).cast("B")
        view[:] = bytes([self.byte]) * len(view)
        return len(view)

    def close(self) -> None:
        self.closed = True


class NullWriter:
    """A writable stream that discards its input and reports it all written."""

    def __init__(self) -> None:
        self.closed = False

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        return memoryview(data).nbytes

    def flush(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True
