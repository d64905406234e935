# SitemapLens — HTML extraction: canonical link and internal links
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import List, Optional
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup, FeatureNotFound

from ..utils.urls import same_domain, same_site


PARSER_CANDIDATES = ["lxml", "html.parser"]


def parse_html(content: bytes) -> BeautifulSoup:
	"""Parse HTML using lxml if available, else builtin parser."""
	for parser in PARSER_CANDIDATES:
		try:
			return BeautifulSoup(content, parser)
		except FeatureNotFound:
			continue
	return BeautifulSoup(content, "html.parser")


def find_canonical(soup: BeautifulSoup, base_url: str) -> Optional[str]:
	"""Absolute canonical URL declared by the page, if any."""
	link = soup.find("link", rel=lambda v: v and "canonical" in v, href=True)
	if link is None:
		return None
	href = (link.get("href") or "").strip()
	if not href:
		return None
	return urljoin(base_url, href)


def extract_internal_links(soup: BeautifulSoup, page_url: str, site_scope: bool = False) -> List[str]:
	"""Unique links inside ``<body>`` that stay on the page's host.

	With ``site_scope`` any host under the same registrable domain counts as
	internal. Fragments are dropped; order of first appearance is kept.
	"""
	body = soup.find("body") or soup
	in_scope = same_site if site_scope else same_domain
	links: List[str] = []
	seen = set()
	for a in body.find_all("a", href=True):
		href = a.get("href", "").strip()
		if not href:
			continue
		resolved, _ = urldefrag(urljoin(page_url, href))
		if urlparse(resolved).scheme not in ("http", "https"):
			continue
		if not in_scope(resolved, page_url) or resolved in seen:
			continue
		seen.add(resolved)
		links.append(resolved)
	return links
