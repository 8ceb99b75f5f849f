# File: sitemap_probe/report/__init__.py
"""sitemap_probe.report: JSON artifacts and console output used by the CLI."""

from __future__ import annotations

from .console import format_summary, print_summary
from .json_report import save_load_test, save_not_found, save_urls

__all__ = ["save_urls", "save_not_found", "save_load_test", "format_summary", "print_summary"]
