# File: sitemap_probe/engine.py
"""sitemap_probe.engine: orchestration of scrape and load-test runs for the CLI and tests."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from sitemap_probe.config import ProbeConfig
from sitemap_probe.crawler.checker import ReachabilityChecker
from sitemap_probe.crawler.fetcher import HttpClient
from sitemap_probe.crawler.models import LoadTestResult, LoadTestSummary, ReachabilityReport
from sitemap_probe.crawler.resolver import SitemapResolver
from sitemap_probe.loadtest.scheduler import LoadTester
from sitemap_probe.logger import logger

__all__ = ["resolve_sitemap", "check_urls", "run_load_test"]


async def resolve_sitemap(cfg: ProbeConfig, sitemap_url: str) -> List[str]:
    """Walk the sitemap graph rooted at *sitemap_url* and return its page URLs."""
    async with HttpClient(cfg) as client:
        urls = await SitemapResolver(client, cfg).resolve(sitemap_url)
    logger.info("Extracted URLs: %d", len(urls))
    return urls


async def check_urls(cfg: ProbeConfig, urls: Sequence[str]) -> ReachabilityReport:
    """Probe each page URL in order; see ReachabilityChecker.check_all."""
    logger.info("Checking pages for 404 errors...")
    async with HttpClient(cfg) as client:
        reachability = await ReachabilityChecker(client, cfg).check_all(urls)
    logger.info(
        "Reachability: %d OK, %d not found, %d unknown",
        len(reachability.ok),
        len(reachability.not_found),
        len(reachability.unknown),
    )
    return reachability


async def run_load_test(
    cfg: ProbeConfig, urls: Sequence[str]
) -> Tuple[List[LoadTestResult], LoadTestSummary]:
    """Run the load test described by *cfg* against *urls*."""
    async with HttpClient(cfg) as client:
        return await LoadTester(client, cfg).run(urls)
