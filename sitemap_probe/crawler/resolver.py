# === FILE: sitemap_probe/crawler/resolver.py ===
"""Sitemap resolver: flattens a graph of nested sitemaps into page URLs.

The walk is depth-first with an explicit stack, so page URLs come out in the
same order a recursive expansion would produce them: every nested sitemap is
expanded in place of its ``<loc>``.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterator, List, Optional, Set

from sitemap_probe.config import ProbeConfig
from sitemap_probe.crawler.fetcher import HttpClient
from sitemap_probe.crawler.models import SitemapIndex, SitemapNode
from sitemap_probe.exceptions import SitemapProbeError
from sitemap_probe.logger import logger
from sitemap_probe.parser.sitemap_parser import parse_sitemap
from sitemap_probe.utils import is_sitemap_location

__all__ = ("SitemapResolver",)

SleepFunc = Callable[[float], Awaitable[None]]


@dataclass(slots=True)
class _Frame:
    url: str
    locations: Iterator[str]
    emitted_before: int


class SitemapResolver:
    """Resolve a root sitemap into a list of page URLs, one fetch per distinct sitemap."""

    def __init__(self, client: HttpClient, config: ProbeConfig, sleep: SleepFunc = asyncio.sleep) -> None:
        self.client = client
        self.config = config
        self._sleep = sleep

    async def resolve(self, root_url: str) -> List[str]:
        """Never raises: a failing sitemap contributes no URLs and the walk goes on."""
        visited: Set[str] = {root_url}
        pages: List[str] = []

        root = await self._load(root_url)
        if root is None:
            return pages
        stack: List[_Frame] = [_Frame(root_url, iter(root.locations), 0)]

        while stack:
            frame = stack[-1]
            location = next(frame.locations, None)
            if location is None:
                stack.pop()
                logger.info(
                    "Total page URLs extracted from %s: %d", frame.url, len(pages) - frame.emitted_before
                )
                continue

            if not is_sitemap_location(location):
                logger.debug("Found page URL: %s", location)
                pages.append(location)
                continue

            if location in visited:
                logger.info("Skipping already processed sitemap: %s", location)
                continue
            visited.add(location)
            logger.info("Found child sitemap: %s", location)
            await self._sleep(self.config.sitemap_delay)
            child = await self._load(location)
            if child is not None:
                stack.append(_Frame(location, iter(child.locations), len(pages)))

        return pages

    async def _load(self, url: str) -> Optional[SitemapNode]:
        logger.info("Processing sitemap: %s", url)
        try:
            body = await self.client.fetch(url, headers=self.config.sitemap_headers())
            node = parse_sitemap(body, url)
        except SitemapProbeError as exc:
            logger.error("Failed to process sitemap %s: %s", url, exc)
            return None
        except Exception as exc:
            logger.exception("Unexpected error processing sitemap %s: %s", url, exc)
            return None
        kind = "sitemap index" if isinstance(node, SitemapIndex) else "urlset"
        logger.info("Found %s with %d entries", kind, len(node.locations))
        return node
