# File: sitemap_probe/report/console.py
"""sitemap_probe.report.console: human-readable load test summary for the terminal."""

from __future__ import annotations

from typing import List

import click

from sitemap_probe.crawler.models import LoadTestSummary


def _percent(part: int, total: int) -> str:
    return f"{(part / total * 100) if total else 0:.2f}%"


def format_summary(summary: LoadTestSummary) -> str:
    """Render the summary block as plain text lines."""
    lines: List[str] = [
        "=== Load Test Summary ===",
        f"Total Requests: {summary.total_requests}",
        f"Successful: {summary.successful_requests} "
        f"({_percent(summary.successful_requests, summary.total_requests)})",
        f"Failed: {summary.failed_requests} ({_percent(summary.failed_requests, summary.total_requests)})",
        "",
        "Response Times:",
        f"  Average: {summary.average_response_time:.2f}ms",
        f"  Min: {summary.min_response_time:.2f}ms",
        f"  Max: {summary.max_response_time:.2f}ms",
        "",
        "Throughput:",
        f"  Requests/sec: {summary.requests_per_second:.2f}",
        f"  Duration: {summary.duration:.2f}s",
        "",
        "Status Code Distribution:",
    ]
    for code, count in sorted(summary.status_code_distribution.items()):
        lines.append(f"  {code}: {count}")
    if summary.errors:
        lines += ["", "Errors:"]
        lines += [f"  {error}: {count}" for error, count in summary.errors.items()]
    lines.append("========================")
    return "\n".join(lines)


def print_summary(summary: LoadTestSummary) -> None:
    click.echo("\n" + format_summary(summary) + "\n")
