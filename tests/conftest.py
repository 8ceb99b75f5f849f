# File: tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator, Awaitable, Callable, List

import pytest
import pytest_asyncio
from aiohttp import web

from sitemap_probe.config import ProbeConfig

ServeFunc = Callable[[web.Application], Awaitable[str]]


@pytest.fixture()
def fast_config(tmp_path: Path) -> ProbeConfig:
    """
    Config without politeness delays and with a short timeout.
    """
    return ProbeConfig(
        timeout=2.0,
        sitemap_delay=0,
        check_delay=0,
        output_dir=tmp_path / "output",
    )


@pytest.fixture()
def sleeps() -> List[float]:
    """Collects the delays requested through :func:`fake_sleep`."""
    return []


@pytest.fixture()
def fake_sleep(sleeps: List[float]):
    async def _sleep(delay: float) -> None:
        sleeps.append(delay)

    return _sleep


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[ServeFunc]:
    """
    Start aiohttp applications on free local ports; returns their base URLs.
    All started servers are cleaned up after the test.
    """
    runners: List[web.AppRunner] = []

    async def _start(app: web.Application) -> str:
        port = unused_tcp_port_factory()
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    yield _start

    for runner in runners:
        await runner.cleanup()


@pytest.fixture()
def dead_url(unused_tcp_port: int) -> str:
    """URL of a local port nothing listens on."""
    return f"http://127.0.0.1:{unused_tcp_port}/page"


@pytest.fixture(
    params=["http://.example.com", "http://" + "a" * 64 + ".com"],
    ids=["empty-label", "long-label"],
)
def bad_host(request) -> str:
    """Origin whose host name cannot be IDNA-encoded."""
    return request.param
