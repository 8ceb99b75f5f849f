# File: sitemap_probe/utils.py
"""sitemap_probe.utils: helpers for URL classification, URL-list files and artifact names."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Union

from sitemap_probe.logger import logger

__all__: Sequence[str] = (
    "is_sitemap_location",
    "read_url_list",
    "artifact_timestamp",
)


def is_sitemap_location(url: str) -> bool:
    """A location ending in ``.xml`` is treated as a nested sitemap, never as a page.

    This is a suffix heuristic: a genuine content page served at ``*.xml`` is
    misclassified as a sitemap.
    """
    return url.endswith(".xml")


def read_url_list(path: Union[str, Path]) -> List[str]:
    """Read a JSON array of URL strings. Missing file raises FileNotFoundError, bad content ValueError."""
    p = Path(path)
    if not p.is_file():
        logger.error("URLs file not found: %s", p)
        raise FileNotFoundError(f"URLs file not found: {p}")
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {p}: {exc}") from exc
    if not isinstance(data, list) or not all(isinstance(u, str) for u in data):
        raise ValueError(f"{p} must contain a JSON array of strings")
    logger.debug("Loaded %d URLs from %s", len(data), p)
    return data


def artifact_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp safe for file names: ``2024-01-02T03-04-05-678Z``."""
    moment = moment or datetime.now(timezone.utc)
    iso = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return iso.replace(":", "-").replace(".", "-")
