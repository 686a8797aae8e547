"""Unit tests for byterate.summary."""

import pytest

from byterate.summary import summarize_rates
from byterate.units import BytesPerSecond


def test_summary_statistics():
    """Average uses the run totals; spread uses the individual reports."""
    reports = [BytesPerSecond(n, 1.0) for n in (100, 200, 300, 400, 500)]
    summary = summarize_rates(reports, total_bytes=1600, elapsed_seconds=5.5)

    assert summary.report_count == 5
    assert summary.total_bytes == 1600
    assert summary.average_bytes_per_second == pytest.approx(1600 / 5.5)
    assert summary.min_bytes_per_second == 100.0
    assert summary.p50_bytes_per_second == pytest.approx(300.0)
    assert summary.p95_bytes_per_second == pytest.approx(480.0)
    assert summary.max_bytes_per_second == 500.0


def test_summary_uses_rate_not_count():
    """Reports with unequal windows are compared by rate."""
    reports = [BytesPerSecond(1000, 2.0), BytesPerSecond(1000, 0.5)]
    summary = summarize_rates(reports, total_bytes=2000, elapsed_seconds=2.5)
    assert summary.min_bytes_per_second == pytest.approx(500.0)
    assert summary.max_bytes_per_second == pytest.approx(2000.0)


def test_summary_without_reports():
    """A run shorter than one interval still has an average."""
    summary = summarize_rates([], total_bytes=10, elapsed_seconds=0.5)
    assert summary.report_count == 0
    assert summary.average_bytes_per_second == pytest.approx(20.0)
    assert summary.p50_bytes_per_second == 0.0
    assert summary.max_bytes_per_second == 0.0


@pytest.mark.parametrize(
    "total_bytes, elapsed_seconds",
    [(-1, 1.0), (10, 0.0), (10, -2.0)],
)
def test_summary_rejects_invalid_totals(total_bytes, elapsed_seconds):
    """Negative byte totals and non-positive durations are rejected."""
    with pytest.raises(ValueError):
        summarize_rates([], total_bytes=total_bytes, elapsed_seconds=elapsed_seconds)
