"""Binary unit scaling for byte quantities and byte rates."""

from dataclasses import dataclass

UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")
UNIT_BASE = 1024.0


def scale_bytes(value: float) -> tuple[float, str]:
    """Scale a byte quantity to the largest binary unit that keeps it below 1024.

    Args:
        value (float): A non-negative number of bytes.

    Returns:
        tuple[float, str]: The scaled value and its unit symbol. Values too
        large for ``EiB`` stay in ``EiB`` and may exceed 1024.
    """
    scaled = float(value)
    unit_index = 0
    while scaled >= UNIT_BASE and unit_index < len(UNITS) - 1:
        scaled /= UNIT_BASE
        unit_index += 1
    return scaled, UNITS[unit_index]


def format_bytes(byte_count: float) -> str:
    """Format a byte quantity, e.g. ``1536`` -> ``"1.50 KiB"``."""
    if byte_count < 0:
        raise ValueError("byte_count must be >= 0")
    scaled, unit = scale_bytes(byte_count)
    return f"{scaled:.2f} {unit}"


def format_rate(byte_count: float, elapsed_seconds: float) -> str:
    """Format the rate of ``byte_count`` bytes over ``elapsed_seconds``.

    Args:
        byte_count (float): Bytes processed during the window.
        elapsed_seconds (float): Length of the window in seconds.

    Returns:
        str: A string such as ``"28.06 GiB/s"``.

    Raises:
        ValueError: If ``byte_count`` is negative or ``elapsed_seconds`` is not
            positive.
    """
    if elapsed_seconds <= 0:
        raise ValueError("elapsed_seconds must be positive")
    return f"{format_bytes(byte_count / elapsed_seconds)}/s"


@dataclass(frozen=True)
class BytesPerSecond:
    """A single rate measurement emitted at a report boundary.

    Attributes:
        byte_count (int): Bytes observed since the previous report.
        elapsed_seconds (float): Seconds elapsed since the previous report.
    """

    byte_count: int
    elapsed_seconds: float

    @property
    def value(self) -> float:
        """Rate in bytes per second."""
        return self.byte_count / self.elapsed_seconds

    def __str__(self) -> str:
        return format_rate(self.byte_count, self.elapsed_seconds)
