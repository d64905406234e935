# SitemapLens — Sitemap discovery via robots.txt and default paths
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import re
from typing import List, Optional

from ..errors import FetchError, SitemapNotFoundError, SitemapParseError
from ..utils.urls import resolve, validate_root_url
from .fetch import Fetcher
from .models import Provenance, SitemapSource
from .sitemap import parse_sitemap


logger = logging.getLogger(__name__)

SITEMAP_DIRECTIVE = re.compile(r"Sitemap:\s*(https?://\S+)")
DEFAULT_SITEMAP_PATHS = ("sitemap.xml", "sitemap_index.xml")


def robots_url_for(root_url: str) -> str:
	return resolve(root_url, "robots.txt")


def parse_robots_sitemaps(robots_txt: str) -> List[str]:
	"""Return every ``Sitemap:`` directive target, in file order.

	Scans the whole text rather than line by line; the keyword is
	case-sensitive.
	"""
	return SITEMAP_DIRECTIVE.findall(robots_txt or "")


async def fetch_robots_sitemaps(fetcher: Fetcher, root_url: str) -> List[str]:
	"""Sitemaps declared in robots.txt. A missing or failing robots.txt yields []."""
	url = robots_url_for(root_url)
	try:
		response = await fetcher.get(url)
	except FetchError as e:
		logger.info("No robots.txt for %s: %s", root_url, e)
		return []
	if not response.ok:
		logger.info("No robots.txt for %s (status %s)", root_url, response.status)
		return []
	return parse_robots_sitemaps(response.text)


async def probe_default_sitemaps(fetcher: Fetcher, root_url: str) -> List[SitemapSource]:
	"""Try the well-known paths in order and stop at the first one that parses.

	A 200 body that is not sitemap XML (a soft 404 served as text/plain, an
	empty page) counts as no result and the next path is tried.
	"""
	for path in DEFAULT_SITEMAP_PATHS:
		url = resolve(root_url, path)
		try:
			response = await fetcher.get_sitemap(url)
			parse_sitemap(response.content)
		except (FetchError, SitemapNotFoundError, SitemapParseError) as e:
			logger.info("%s", e)
			continue
		logger.info("Found sitemap in default location: %s", url)
		return [SitemapSource(url, Provenance.DEFAULT_PATH)]
	return []


async def locate_sitemaps(fetcher: Fetcher, root_url: str, override: Optional[str] = None) -> List[SitemapSource]:
	"""Ordered sitemap entry points for a site.

	An explicit ``override`` (absolute URL or path relative to the root) wins
	outright. Otherwise robots.txt directives are used, and only when there
	are none are the default paths probed. Raises InvalidRootUrlError for a
	malformed root before any request is made.
	"""
	root_url = validate_root_url(root_url)
	if override:
		return [SitemapSource(resolve(root_url, override), Provenance.USER_PROVIDED)]

	declared = await fetch_robots_sitemaps(fetcher, root_url)
	if declared:
		for url in declared:
			logger.info("Found sitemap in robots.txt: %s", url)
		return [SitemapSource(url, Provenance.ROBOTS_TXT) for url in declared]

	sources = await probe_default_sitemaps(fetcher, root_url)
	if not sources:
		logger.info("No sitemap found for %s", root_url)
	return sources
