# File: sitemap_probe/parser/sitemap_parser.py
"""sitemap_probe.parser.sitemap_parser: parse sitemap XML into SitemapIndex / UrlSet nodes."""

from __future__ import annotations

from typing import List, Union

from lxml import etree

from sitemap_probe.crawler.models import SitemapIndex, SitemapNode, UrlSet
from sitemap_probe.exceptions import ParseError


def _locations(root: etree._Element, entry_tag: str) -> List[str]:
    locs: List[str] = []
    for entry in root:
        if not isinstance(entry.tag, str) or etree.QName(entry).localname.lower() != entry_tag:
            continue
        # {*} matches namespaced and plain <loc> alike
        loc = entry.find("{*}loc")
        if loc is not None and loc.text and loc.text.strip():
            locs.append(loc.text.strip())
    return locs


def parse_sitemap(xml_content: Union[bytes, str], url: str = "") -> SitemapNode:
    """Parse a sitemap document and return its tagged node.

    Args:
        xml_content: raw document, bytes preferred so the XML declaration decides the encoding.
        url: where the document came from, used for the node identity and error messages.

    Returns:
        ``SitemapIndex`` for ``<sitemapindex>``, ``UrlSet`` for ``<urlset>``.
        Entries without a ``<loc>`` are skipped.

    Raises:
        ParseError: malformed XML, empty document or an unknown root element.

    Example:
    ```python
    from sitemap_probe.parser.sitemap_parser import parse_sitemap

    node = parse_sitemap(open('sitemap.xml', 'rb').read(), 'https://example.com/sitemap.xml')
    print(node.locations)
    ```
    """
    if isinstance(xml_content, str):
        xml_content = xml_content.encode("utf-8")
    if not xml_content.strip():
        raise ParseError(url, "empty document")

    parser = etree.XMLParser(ns_clean=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(xml_content, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise ParseError(url, f"malformed XML: {exc}") from exc

    root_name = etree.QName(root).localname.lower()
    if root_name == "sitemapindex":
        return SitemapIndex(url=url, children=tuple(_locations(root, "sitemap")))
    if root_name == "urlset":
        return UrlSet(url=url, entries=tuple(_locations(root, "url")))
    raise ParseError(url, f"unknown root element <{root_name}>")


__all__ = ["parse_sitemap"]
