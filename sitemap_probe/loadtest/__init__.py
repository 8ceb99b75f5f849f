# File: sitemap_probe/loadtest/__init__.py
"""sitemap_probe.loadtest: bounded-concurrency load test scheduler."""

from .scheduler import LoadTester, build_queue

__all__ = ["LoadTester", "build_queue"]
