# SitemapLens — Sitemap XML parsing (urlset and sitemapindex)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from dataclasses import dataclass, field
from typing import List
import xml.etree.ElementTree as ET

from ..errors import SitemapParseError
from .models import SITEMAP_KIND_INDEX, SITEMAP_KIND_URLSET


@dataclass
class ParsedSitemap:
	kind: str
	locs: List[str] = field(default_factory=list)

	@property
	def is_index(self) -> bool:
		return self.kind == SITEMAP_KIND_INDEX


def _local_name(tag: str) -> str:
	return tag.rsplit("}", 1)[-1]


def parse_sitemap(content: bytes) -> ParsedSitemap:
	"""Parse a sitemaps.org document.

	Only direct ``<url><loc>`` (urlset) or ``<sitemap><loc>`` (index) entries
	count; blank locs are dropped. Raises SitemapParseError for malformed XML
	or an unknown root element.
	"""
	try:
		root = ET.fromstring((content or b"").lstrip())
	except ET.ParseError as e:
		raise SitemapParseError(f"Malformed sitemap XML: {e}") from e
	kind = _local_name(root.tag)
	if kind == SITEMAP_KIND_URLSET:
		path = "{*}url/{*}loc"
	elif kind == SITEMAP_KIND_INDEX:
		path = "{*}sitemap/{*}loc"
	else:
		raise SitemapParseError(f"Unsupported sitemap root element: <{kind}>")
	locs: List[str] = []
	for loc in root.findall(path):
		u = (loc.text or "").strip()
		if u:
			locs.append(u)
	return ParsedSitemap(kind=kind, locs=locs)
