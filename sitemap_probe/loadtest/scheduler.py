# === FILE: sitemap_probe/loadtest/scheduler.py ===
"""
Load test scheduler: a fixed pool of ``concurrency`` workers drains a request
queue built up front, so no more than ``concurrency`` requests are outstanding.

Results are recorded in completion order, which under concurrency differs from
queue order. The optional duration budget is checked before every dispatch;
once spent, no new request starts and the ones in flight finish normally.
"""
from __future__ import annotations

import asyncio
import time
from typing import Callable, List, Optional, Sequence, Tuple

from sitemap_probe.aggregator import summarize
from sitemap_probe.config import ProbeConfig
from sitemap_probe.crawler.fetcher import HttpClient
from sitemap_probe.crawler.models import LoadTestResult, LoadTestSummary, RequestQueueItem
from sitemap_probe.exceptions import TransportError
from sitemap_probe.logger import logger

__all__ = ("LoadTester", "build_queue")


def build_queue(urls: Sequence[str], requests_per_url: int) -> List[RequestQueueItem]:
    """Every URL once per repetition pass: ``[(u0, 0), (u1, 0), ..., (u0, 1), ...]``."""
    return [RequestQueueItem(url, rep) for rep in range(requests_per_url) for url in urls]


class LoadTester:
    """Run a bounded-concurrency load test against a list of URLs."""

    def __init__(
        self,
        client: HttpClient,
        config: ProbeConfig,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = client
        self.config = config
        self._clock = clock
        self._stopped = False
        self._start = 0.0

    async def run(self, urls: Sequence[str]) -> Tuple[List[LoadTestResult], LoadTestSummary]:
        cfg = self.config
        items = build_queue(urls, cfg.requests_per_url)
        self._log_banner(len(urls))

        queue: asyncio.Queue[RequestQueueItem] = asyncio.Queue()
        for item in items:
            queue.put_nowait(item)

        results: List[LoadTestResult] = []
        self._stopped = False
        self._start = self._clock()
        workers = [
            asyncio.create_task(self._worker(queue, results, len(items)))
            for _ in range(min(cfg.concurrency, len(items)))
        ]
        await asyncio.gather(*workers)
        elapsed = self._clock() - self._start

        return results, summarize(results, elapsed)

    async def _worker(
        self,
        queue: asyncio.Queue[RequestQueueItem],
        results: List[LoadTestResult],
        total: int,
    ) -> None:
        while not self._stopped:
            if self._duration_spent():
                logger.info("Duration limit reached, stopping load test...")
                self._stopped = True
                break
            try:
                item = queue.get_nowait()
            except asyncio.QueueEmpty:
                break
            started = time.perf_counter()
            try:
                result = await self.request(item.url)
            except Exception as exc:
                logger.error("Error testing %s: %s", item.url, exc)
                result = LoadTestResult(
                    url=item.url,
                    success=False,
                    response_time=_elapsed_ms(started),
                    timestamp=_now_ms(),
                    error=str(exc) or type(exc).__name__,
                )
            results.append(result)
            mark = "✓" if result.success else "✗"
            code = f"[{result.status_code}]" if result.status_code is not None else "[ERR]"
            logger.info(
                "%s %s %.0fms - %s (%d/%d)", mark, code, result.response_time, item.url, len(results), total
            )

    def _duration_spent(self) -> bool:
        duration: Optional[float] = self.config.duration
        return duration is not None and self._clock() - self._start >= duration

    async def request(self, url: str) -> LoadTestResult:
        """One GET; statuses are recorded as-is, transport failures as errors."""
        started = time.perf_counter()
        try:
            status = await self.client.get_status(url, headers=self.config.page_headers())
        except TransportError as exc:
            return LoadTestResult(
                url=url,
                success=False,
                response_time=_elapsed_ms(started),
                timestamp=_now_ms(),
                error=str(exc),
            )
        return LoadTestResult(
            url=url,
            success=200 <= status < 400,
            response_time=_elapsed_ms(started),
            timestamp=_now_ms(),
            status_code=status,
        )

    def _log_banner(self, url_count: int) -> None:
        cfg = self.config
        logger.info("=== Starting Load Test ===")
        logger.info("URLs to test: %d", url_count)
        logger.info("Concurrent requests: %d", cfg.concurrency)
        logger.info("Requests per URL: %d", cfg.requests_per_url)
        if cfg.duration:
            logger.info("Duration: %s seconds", cfg.duration)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _now_ms() -> int:
    return int(time.time() * 1000)
