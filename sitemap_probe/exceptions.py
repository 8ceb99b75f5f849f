# File: sitemap_probe/exceptions.py
"""sitemap_probe.exceptions: error hierarchy shared by the fetcher, parser and checker."""

from __future__ import annotations

from typing import Optional


class SitemapProbeError(Exception):
    """Base class for all SitemapProbe errors."""


class TransportError(SitemapProbeError):
    """The request never produced a response: timeout, DNS failure, refused or reset connection."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class HTTPStatusError(SitemapProbeError):
    """A response arrived but its status is not acceptable for the caller."""

    def __init__(self, url: str, status: int, reason: Optional[str] = None) -> None:
        text = f"HTTP {status}" + (f" {reason}" if reason else "") + f" for {url}"
        super().__init__(text)
        self.url = url
        self.status = status


class ParseError(SitemapProbeError):
    """Sitemap document is malformed or has an unknown root element."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{url}: {message}" if url else message)
        self.url = url


__all__ = ["SitemapProbeError", "TransportError", "HTTPStatusError", "ParseError"]
