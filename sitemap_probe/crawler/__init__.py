# File: sitemap_probe/crawler/__init__.py
"""sitemap_probe.crawler: HTTP adapter, sitemap resolver, reachability checker and shared models."""
