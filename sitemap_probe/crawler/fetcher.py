# sitemap_probe/crawler/fetcher.py
"""
Fetcher module: thin aiohttp adapter with a fixed timeout and header set.

Completed responses always expose their status code (4xx/5xx included);
anything that prevents a response from arriving is raised as TransportError.
"""
from __future__ import annotations

import asyncio
from typing import Mapping, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from sitemap_probe.config import ProbeConfig
from sitemap_probe.exceptions import HTTPStatusError, TransportError

# Host names that fail IDNA encoding surface as UnicodeError, a ValueError.
_TRANSPORT_ERRORS = (ClientError, asyncio.TimeoutError, ValueError, OSError)


class HttpClient:
    """Owns one ClientSession; use as ``async with HttpClient(cfg) as client``."""

    def __init__(self, config: ProbeConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> HttpClient:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers=self.config.page_headers(),
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def _session(self) -> ClientSession:
        if not self.session:
            raise RuntimeError("Session not initialized")
        return self.session

    def _transport_error(self, url: str, exc: BaseException) -> TransportError:
        if isinstance(exc, asyncio.TimeoutError):
            return TransportError(url, f"timeout of {self.config.timeout}s exceeded")
        return TransportError(url, str(exc) or type(exc).__name__)

    async def fetch(self, url: str, headers: Optional[Mapping[str, str]] = None) -> bytes:
        """GET *url* and return the raw body; statuses >= 400 raise HTTPStatusError."""
        try:
            async with self._session().get(url, headers=headers) as resp:
                if resp.status >= 400:
                    raise HTTPStatusError(url, resp.status, resp.reason)
                return await resp.read()
        except _TRANSPORT_ERRORS as exc:
            raise self._transport_error(url, exc) from exc

    async def get_status(self, url: str, headers: Optional[Mapping[str, str]] = None) -> int:
        """GET *url*, drain the body and return the status whatever it is."""
        try:
            async with self._session().get(url, headers=headers) as resp:
                await resp.read()
                return resp.status
        except _TRANSPORT_ERRORS as exc:
            raise self._transport_error(url, exc) from exc

    async def head(self, url: str, headers: Optional[Mapping[str, str]] = None) -> int:
        """HEAD *url* (redirects followed) and return the final status."""
        try:
            async with self._session().head(url, headers=headers, allow_redirects=True) as resp:
                return resp.status
        except _TRANSPORT_ERRORS as exc:
            raise self._transport_error(url, exc) from exc


__all__ = ["HttpClient"]
