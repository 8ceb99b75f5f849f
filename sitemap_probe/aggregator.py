# File: sitemap_probe/aggregator.py
"""sitemap_probe.aggregator: reduce load-test results into a LoadTestSummary."""

from __future__ import annotations

from typing import Dict, Sequence

from sitemap_probe.crawler.models import LoadTestResult, LoadTestSummary


def summarize(results: Sequence[LoadTestResult], elapsed_seconds: float) -> LoadTestSummary:
    """Build the summary in one pass over *results*. Pure: the input is not touched.

    Empty results give zeros for every response-time statistic and a zero
    elapsed time gives zero throughput.
    """
    total = len(results)
    successful = 0
    time_sum = 0.0
    time_min = float("inf")
    time_max = float("-inf")
    status_codes: Dict[int, int] = {}
    errors: Dict[str, int] = {}

    for r in results:
        time_sum += r.response_time
        time_min = min(time_min, r.response_time)
        time_max = max(time_max, r.response_time)
        if r.success:
            successful += 1
        elif r.error:
            errors[r.error] = errors.get(r.error, 0) + 1
        if r.status_code is not None:
            status_codes[r.status_code] = status_codes.get(r.status_code, 0) + 1

    return LoadTestSummary(
        total_requests=total,
        successful_requests=successful,
        failed_requests=total - successful,
        average_response_time=time_sum / total if total else 0,
        min_response_time=time_min if total else 0,
        max_response_time=time_max if total else 0,
        requests_per_second=total / elapsed_seconds if elapsed_seconds else 0,
        duration=elapsed_seconds,
        status_code_distribution=status_codes,
        errors=errors,
    )


__all__ = ["summarize"]
