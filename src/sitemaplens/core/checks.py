# SitemapLens — Per-page checks run over de-duplicated sitemap pages
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Collection, Dict, Iterable, List, Optional, TypeVar
from urllib.parse import urlparse

from ..errors import FetchError
from .extract import extract_internal_links, find_canonical, parse_html
from .fetch import Fetcher


logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def gather_limited(func: Callable[[T], Awaitable[R]], items: Iterable[T], limit: int) -> List[R]:
	"""Run ``func`` over ``items`` concurrently, at most ``limit`` at a time."""
	semaphore = asyncio.Semaphore(max(1, int(limit)))

	async def run(item: T) -> R:
		async with semaphore:
			return await func(item)

	return list(await asyncio.gather(*(run(i) for i in items)))


@dataclass
class PageCheck:
	url: str
	errors: List[str] = field(default_factory=list)
	warnings: List[str] = field(default_factory=list)

	@property
	def has_issues(self) -> bool:
		return bool(self.errors or self.warnings)


async def check_page(fetcher: Fetcher, url: str) -> PageCheck:
	"""Sitemap page sanity: no draft files, must answer 2xx."""
	check = PageCheck(url)
	if "draft" in url:
		check.warnings.append(f"Detected draft file: {url}")
	try:
		response = await fetcher.get(url)
		if not response.ok:
			check.errors.append(f"must return 2xx but returns {response.status}")
	except FetchError as e:
		check.errors.append(f"{url} returns error {e}")
	return check


def _toggle_www(url: str) -> str:
	p = urlparse(url)
	host = p.netloc
	host = host[4:] if host.startswith("www.") else f"www.{host}"
	return p._replace(netloc=host).geturl()


def _toggle_trailing_slash(url: str) -> str:
	return url[:-1] if url.endswith("/") else f"{url}/"


def _toggle_html_extension(url: str) -> str:
	return url[:-5] if url.endswith(".html") else f"{url}.html"


ALTERNATIVES = (
	(_toggle_www, "WWW version in sitemap"),
	(_toggle_trailing_slash, "Trailing slash version in sitemap"),
	(_toggle_html_extension, "HTML extension version in sitemap"),
)


def canonical_issues(page_url: str, final_url: str, canonical: str, sitemap_pages: Collection[str]) -> List[str]:
	"""Issues for one page given its canonical link and the sitemap's page set."""
	in_sitemap = canonical in sitemap_pages
	reasons = [label for toggle, label in ALTERNATIVES if toggle(page_url) in sitemap_pages]
	issues: List[str] = []
	if not in_sitemap:
		if reasons:
			issues.append(f"Canonical not in sitemap, but alternative found: {', '.join(reasons)}")
		else:
			issues.append("Canonical not in sitemap")
	if final_url != canonical:
		issues.append("Canonical URL does not match page URL")
	if "?" in final_url:
		issues.append("URL contains parameters")
	return issues


async def check_canonical(fetcher: Fetcher, url: str, sitemap_pages: Collection[str]) -> Optional[Dict[str, Any]]:
	"""Report row for a page with canonical problems, or None when it is clean or not HTML."""
	try:
		response = await fetcher.get(url)
	except FetchError as e:
		return {"url": url, "error": str(e)}
	if "text/html" not in response.content_type.lower():
		return None
	final_url = response.url or url
	canonical = find_canonical(parse_html(response.content), final_url)
	if not canonical:
		return {"url": url, "error": "No canonical link found"}
	issues = canonical_issues(url, final_url, canonical, sitemap_pages)
	if not issues:
		return None
	return {"url": final_url, "status": response.status, "issues": ". ".join(issues)}


async def find_broken_links(
	fetcher: Fetcher,
	page_url: str,
	site_scope: bool = False,
	limit: int = 10,
) -> List[Dict[str, Any]]:
	"""Rows for internal links on ``page_url`` that answer with a non-2xx status.

	Links that fail at the network level are not reported.
	"""
	try:
		response = await fetcher.get(page_url)
	except FetchError as e:
		logger.error("Failed to fetch internal links from %s: %s", page_url, e)
		return []
	if not response.ok:
		return []
	links = extract_internal_links(parse_html(response.content), response.url or page_url, site_scope=site_scope)
	if not links:
		return []

	async def probe(link: str) -> Optional[Dict[str, Any]]:
		try:
			r = await fetcher.get(link)
		except FetchError:
			return None
		if r.ok:
			return None
		return {"url": page_url, "brokenLink": link, "statusCode": r.status}

	results = await gather_limited(probe, links, limit)
	return [row for row in results if row is not None]
