# File: tests/test_scheduler.py
# Load test scheduler against a local aiohttp server
from __future__ import annotations

import asyncio
import time

import pytest
from aiohttp import web

from sitemap_probe.crawler.fetcher import HttpClient
from sitemap_probe.crawler.models import RequestQueueItem
from sitemap_probe.loadtest.scheduler import LoadTester, build_queue

#: seconds each "slow" page takes to answer
SLOW_SLEEP: float = 0.2


class Tracker:
    """Counts requests currently being served and remembers the peak."""

    def __init__(self) -> None:
        self.in_flight = 0
        self.peak = 0
        self.order: list[str] = []


def load_app(tracker: Tracker, delay: float = 0.05) -> web.Application:
    app = web.Application()

    async def page(request: web.Request) -> web.Response:
        tracker.in_flight += 1
        tracker.peak = max(tracker.peak, tracker.in_flight)
        tracker.order.append(request.path)
        try:
            await asyncio.sleep(delay)
        finally:
            tracker.in_flight -= 1
        return web.Response(text="<h1>Page</h1>", content_type="text/html")

    async def error(_):
        return web.Response(status=500, text="boom")

    async def missing(_):
        return web.Response(status=404)

    async def hang(_):
        await asyncio.sleep(1)
        return web.Response(text="late")

    app.router.add_get("/error", error)
    app.router.add_get("/missing", missing)
    app.router.add_get("/hang", hang)
    app.router.add_get("/{name}", page)
    return app


async def run(config, urls):
    async with HttpClient(config) as client:
        return await LoadTester(client, config).run(urls)


# --------------------------------------------------------------------------- #
#                                   Tests                                     #
# --------------------------------------------------------------------------- #


def test_build_queue_is_url_major_per_repetition():
    queue = build_queue(["a", "b"], 3)
    assert queue == [
        RequestQueueItem("a", 0),
        RequestQueueItem("b", 0),
        RequestQueueItem("a", 1),
        RequestQueueItem("b", 1),
        RequestQueueItem("a", 2),
        RequestQueueItem("b", 2),
    ]
    assert build_queue([], 5) == []


@pytest.mark.asyncio()
async def test_every_item_dispatched_without_duration(fast_config, serve):
    tracker = Tracker()
    base = await serve(load_app(tracker, delay=0.01))
    urls = [f"{base}/p{i}" for i in range(4)]
    cfg = fast_config.with_overrides(concurrency=3, requests_per_url=3)

    results, summary = await run(cfg, urls)

    assert len(results) == 12
    assert summary.total_requests == 12
    assert summary.successful_requests == 12
    assert summary.status_code_distribution == {200: 12}
    assert sorted(r.url for r in results) == sorted(urls * 3)


@pytest.mark.asyncio()
async def test_concurrency_limit_is_never_exceeded(fast_config, serve):
    tracker = Tracker()
    base = await serve(load_app(tracker, delay=0.05))
    urls = [f"{base}/p{i}" for i in range(12)]
    cfg = fast_config.with_overrides(concurrency=4)

    results, _ = await run(cfg, urls)

    assert len(results) == 12
    assert tracker.peak <= 4
    assert tracker.peak > 1


@pytest.mark.asyncio()
async def test_concurrency_one_keeps_enumeration_order(fast_config, serve):
    tracker = Tracker()
    base = await serve(load_app(tracker, delay=0.01))
    urls = [f"{base}/a", f"{base}/b"]
    cfg = fast_config.with_overrides(concurrency=1, requests_per_url=1)

    results, summary = await run(cfg, urls)

    assert [r.url for r in results] == urls
    assert tracker.order == ["/a", "/b"]
    assert tracker.peak == 1
    assert summary.total_requests == 2


@pytest.mark.asyncio()
async def test_requests_run_concurrently(fast_config, serve):
    tracker = Tracker()
    base = await serve(load_app(tracker, delay=SLOW_SLEEP))
    urls = [f"{base}/s{i}" for i in range(5)]
    cfg = fast_config.with_overrides(concurrency=5)

    start = time.perf_counter()
    results, _ = await run(cfg, urls)
    elapsed = time.perf_counter() - start

    assert len(results) == 5
    assert elapsed < SLOW_SLEEP * 3


@pytest.mark.asyncio()
async def test_duration_cap_stops_dispatch(fast_config, serve):
    tracker = Tracker()
    base = await serve(load_app(tracker, delay=0.1))
    urls = [f"{base}/p{i}" for i in range(20)]
    cfg = fast_config.with_overrides(concurrency=2, duration=0.25)

    results, summary = await run(cfg, urls)

    assert 0 < len(results) < 20
    assert summary.total_requests == len(results)
    # in-flight requests are drained, never cancelled
    assert tracker.in_flight == 0
    assert all(r.success for r in results)


@pytest.mark.asyncio()
async def test_status_errors_are_recorded_not_raised(fast_config, serve):
    tracker = Tracker()
    base = await serve(load_app(tracker, delay=0))
    cfg = fast_config.with_overrides(concurrency=2)

    results, summary = await run(cfg, [f"{base}/error", f"{base}/missing", f"{base}/fine"])

    by_url = {r.url: r for r in results}
    assert by_url[f"{base}/error"].success is False
    assert by_url[f"{base}/error"].status_code == 500
    assert by_url[f"{base}/error"].error is None
    assert by_url[f"{base}/missing"].status_code == 404
    assert by_url[f"{base}/fine"].success is True
    assert summary.failed_requests == 2
    assert summary.errors == {}
    assert summary.status_code_distribution == {500: 1, 404: 1, 200: 1}


@pytest.mark.asyncio()
async def test_transport_failures_are_recorded(fast_config, serve, dead_url):
    tracker = Tracker()
    base = await serve(load_app(tracker, delay=0))
    cfg = fast_config.with_overrides(timeout=0.3, concurrency=3)

    results, summary = await run(cfg, [dead_url, f"{base}/hang", f"{base}/ok"])

    by_url = {r.url: r for r in results}
    refused = by_url[dead_url]
    assert refused.success is False
    assert refused.status_code is None
    assert refused.error
    timed_out = by_url[f"{base}/hang"]
    assert timed_out.status_code is None
    assert timed_out.error == "timeout of 0.3s exceeded"
    assert summary.failed_requests == 2
    assert summary.errors[timed_out.error] == 1
    assert 200 in summary.status_code_distribution


@pytest.mark.asyncio()
async def test_throughput_matches_total_over_duration(fast_config, serve):
    tracker = Tracker()
    base = await serve(load_app(tracker, delay=0.02))
    cfg = fast_config.with_overrides(concurrency=3, requests_per_url=2)

    results, summary = await run(cfg, [f"{base}/a", f"{base}/b", f"{base}/c"])

    assert summary.duration > 0
    assert summary.requests_per_second * summary.duration == pytest.approx(len(results))
    assert summary.min_response_time <= summary.average_response_time <= summary.max_response_time


@pytest.mark.asyncio()
async def test_empty_url_list(fast_config):
    async with HttpClient(fast_config) as client:
        results, summary = await LoadTester(client, fast_config).run([])
    assert results == []
    assert summary.total_requests == 0
    assert summary.average_response_time == 0


@pytest.mark.asyncio()
async def test_invalid_host_is_recorded_as_failure(fast_config, serve, bad_host):
    tracker = Tracker()
    base = await serve(load_app(tracker, delay=0))
    cfg = fast_config.with_overrides(concurrency=2)

    results, summary = await run(cfg, [f"{bad_host}/a", f"{base}/ok"])

    assert len(results) == 2
    failed = [r for r in results if not r.success]
    assert len(failed) == 1
    assert failed[0].url == f"{bad_host}/a"
    assert failed[0].status_code is None
    assert failed[0].error
    assert summary.failed_requests == 1
    assert summary.status_code_distribution == {200: 1}
