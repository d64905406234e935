# SitemapLens — Audits: sitemap, page listing, canonical, broken internal links
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..storage.writers import Report, make_report
from ..utils.urls import validate_root_url
from .aggregate import dedupe_pages, split_entries
from .checks import check_canonical, check_page, find_broken_links, gather_limited
from .fetch import Fetcher
from .models import Entry, PageEntry, SitemapSource
from .robots import locate_sitemaps
from .traverse import traverse


logger = logging.getLogger(__name__)

NO_SITEMAP_ERROR = "No sitemap found"


@dataclass
class AuditSummary:
	audit_type: str
	amount_of_issues: int
	location: Optional[str]


class SitemapAuditor:
	"""Runs audits for one site at a time over a shared fetcher.

	Every audit starts from the same discovery step: locate sitemaps,
	traverse them, de-duplicate the pages.
	"""

	def __init__(
		self,
		fetcher: Fetcher,
		max_concurrency: int = 10,
		output_dir: str = "output",
		report_format: str = "csv",
	) -> None:
		self.fetcher = fetcher
		self.max_concurrency = max(1, int(max_concurrency))
		self.output_dir = output_dir
		self.report_format = report_format

	@classmethod
	def from_settings(cls, settings, fetcher: Optional[Fetcher] = None) -> "SitemapAuditor":
		return cls(
			fetcher or Fetcher.from_settings(settings),
			max_concurrency=settings.max_concurrency,
			output_dir=settings.output_dir,
			report_format=settings.report_format,
		)

	def _report(self, title: str, site: str) -> Report:
		return make_report(self.report_format, title, site, output_dir=self.output_dir)

	async def discover(self, root_url: str, override: Optional[str] = None) -> Tuple[List[SitemapSource], List[Entry]]:
		root_url = validate_root_url(root_url)
		sources = await locate_sitemaps(self.fetcher, root_url, override)
		entries = await traverse(sources, self.fetcher, max_concurrency=self.max_concurrency)
		return sources, entries

	async def collect_pages(self, root_url: str, override: Optional[str] = None) -> List[PageEntry]:
		_, entries = await self.discover(root_url, override)
		pages = dedupe_pages(entries)
		logger.info("Total pages for %s: %d", root_url, len(pages))
		return pages

	async def audit_sitemaps(self, root_url: str, override: Optional[str] = None) -> AuditSummary:
		"""Sitemap audit: one row per sitemap, plus a row per page with problems."""
		title = "Sitemap"
		report = self._report(title, root_url)
		report.set_row_headers_and_defaults({"sitemapOrPage": "", "source": "", "locs": 0, "error": "", "warning": ""})

		sources, entries = await self.discover(root_url, override)
		if not sources:
			report.add_row({"sitemapOrPage": root_url, "error": NO_SITEMAP_ERROR})
		results, _ = split_entries(entries)
		for result in results:
			report.add_row(result.to_row())

		pages = dedupe_pages(entries)
		checks = await gather_limited(lambda p: check_page(self.fetcher, p.page), pages, self.max_concurrency)
		for page, check in zip(pages, checks):
			if check.has_issues:
				report.add_row({
					"sitemapOrPage": page.page,
					"source": page.source,
					"error": ", ".join(check.errors),
					"warning": ", ".join(check.warnings),
				})
		location = report.end()
		issues = sum(1 for r in report.rows if r.get("error") or r.get("warning"))
		return AuditSummary(title, issues, location)

	async def audit_canonicals(self, root_url: str, override: Optional[str] = None, limit: Optional[int] = None) -> AuditSummary:
		title = "Canonical Audit"
		report = self._report(title, root_url)
		report.set_row_headers_and_defaults({"url": "", "issues": "", "error": ""})

		pages = await self.collect_pages(root_url, override)
		sitemap_pages = {p.page for p in pages}
		targets = pages[:limit] if limit else pages
		rows = await gather_limited(
			lambda p: check_canonical(self.fetcher, p.page, sitemap_pages), targets, self.max_concurrency
		)
		for row in rows:
			if row:
				report.add_row(row)
		location = report.end()
		return AuditSummary(title, len(report.rows), location)

	async def audit_broken_links(
		self,
		root_url: str,
		override: Optional[str] = None,
		limit: Optional[int] = 100,
		site_scope: bool = False,
	) -> AuditSummary:
		title = "Broken Internal Links"
		report = self._report(title, root_url)
		report.set_row_headers_and_defaults({"url": "", "brokenLink": "", "statusCode": ""})

		pages = await self.collect_pages(root_url, override)
		targets = pages[:limit] if limit else pages

		async def check(page: PageEntry):
			logger.info("Checking the page: %s", page.page)
			return await find_broken_links(self.fetcher, page.page, site_scope=site_scope, limit=self.max_concurrency)

		per_page = await gather_limited(check, targets, self.max_concurrency)
		for rows in per_page:
			for row in rows:
				report.add_row(row)
		logger.info("Pages checked: %d, broken internal links: %d", len(targets), len(report.rows))
		location = report.end()
		return AuditSummary(title, len(report.rows), location)
