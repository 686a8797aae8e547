"""Functions for summarizing the rate reports of a single run."""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from .units import BytesPerSecond


@dataclass
class RateSummary:
    """Container for statistics over one stream's rate reports.

    Attributes:
        report_count (int): Number of reports emitted during the run.
        total_bytes (int): Bytes observed over the whole run, reported or not.
        elapsed_seconds (float): Wall duration of the run in seconds.
        average_bytes_per_second (float): ``total_bytes / elapsed_seconds``.
        min_bytes_per_second (float): Slowest reported rate.
        p50_bytes_per_second (float): Median reported rate.
        p95_bytes_per_second (float): 95th percentile of reported rates.
        max_bytes_per_second (float): Fastest reported rate.
    """

    report_count: int
    total_bytes: int
    elapsed_seconds: float
    average_bytes_per_second: float
    min_bytes_per_second: float
    p50_bytes_per_second: float
    p95_bytes_per_second: float
    max_bytes_per_second: float


def summarize_rates(
    measurements: Iterable[BytesPerSecond],
    *,
    total_bytes: int,
    elapsed_seconds: float,
) -> RateSummary:
    """Compute the average rate and the spread of the per-interval rates.

    Args:
        measurements (Iterable[BytesPerSecond]): Reports in emission order.
        total_bytes (int): Bytes moved during the run, including any tail that
            never reached a report boundary.
        elapsed_seconds (float): Duration of the run in seconds.

    Returns:
        RateSummary: Aggregate statistics. Percentile fields are ``0.0`` when
        no report was emitted.

    Raises:
        ValueError: If ``total_bytes`` is negative or ``elapsed_seconds`` is
            not positive.
    """
    if total_bytes < 0:
        raise ValueError("total_bytes must be >= 0")
    if elapsed_seconds <= 0:
        raise ValueError("elapsed_seconds must be positive")

    rates = np.array([m.value for m in measurements], dtype=np.float64)
    if rates.size:
        p50, p95 = np.percentile(rates, [50, 95])
        low, high = float(np.min(rates)), float(np.max(rates))
    else:
        p50 = p95 = 0.0
        low = high = 0.0

    return RateSummary(
        report_count=int(rates.size),
        total_bytes=int(total_bytes),
        elapsed_seconds=float(elapsed_seconds),
        average_bytes_per_second=float(total_bytes / elapsed_seconds),
        min_bytes_per_second=low,
        p50_bytes_per_second=float(p50),
        p95_bytes_per_second=float(p95),
        max_bytes_per_second=high,
    )
