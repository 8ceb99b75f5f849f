# sitemap_probe/crawler/checker.py
"""
Reachability checker: sequential HEAD probes separating 404 from everything else.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Sequence

from sitemap_probe.config import ProbeConfig
from sitemap_probe.crawler.fetcher import HttpClient
from sitemap_probe.crawler.models import ReachabilityReport
from sitemap_probe.exceptions import HTTPStatusError, SitemapProbeError
from sitemap_probe.logger import logger


class ReachabilityChecker:
    """Probes page URLs one at a time with a fixed pause after each check."""

    def __init__(
        self,
        client: HttpClient,
        config: ProbeConfig,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.client = client
        self.config = config
        self._sleep = sleep

    async def check_exists(self, url: str) -> bool:
        """
        False for 404, True for any status below 400.

        Other statuses raise HTTPStatusError, transport failures raise TransportError.
        """
        status = await self.client.head(url, headers=self.config.page_headers())
        if status == 404:
            return False
        if status >= 400:
            raise HTTPStatusError(url, status)
        return True

    async def check_all(self, urls: Sequence[str]) -> ReachabilityReport:
        """Check every URL; a failed check marks the URL unknown and the scan continues."""
        report = ReachabilityReport()
        total = len(urls)
        for i, url in enumerate(urls, start=1):
            try:
                exists = await self.check_exists(url)
            except SitemapProbeError as exc:
                report.unknown.append(url)
                logger.error("[%d/%d] Error checking %s: %s", i, total, url, exc)
            else:
                if exists:
                    report.ok.append(url)
                    logger.info("[%d/%d] OK: %s", i, total, url)
                else:
                    report.not_found.append(url)
                    logger.info("[%d/%d] 404 Not Found: %s", i, total, url)
            await self._sleep(self.config.check_delay)
        return report


__all__ = ["ReachabilityChecker"]
