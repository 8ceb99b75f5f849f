# sitemap_probe/__init__.py
"""
SitemapProbe package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

from .cli import cli  # noqa: E402

__all__ = ["cli", "__version__"]
