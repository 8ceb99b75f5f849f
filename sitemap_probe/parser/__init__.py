# File: sitemap_probe/parser/__init__.py
"""sitemap_probe.parser: sitemap XML parsing."""

from .sitemap_parser import parse_sitemap

__all__ = ["parse_sitemap"]
