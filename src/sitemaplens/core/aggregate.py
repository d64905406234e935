# SitemapLens — Aggregation of traversal output and page de-duplication
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import Iterable, List, Set, Tuple

from .models import Entry, PageEntry, SitemapResult


def split_entries(entries: Iterable[Entry]) -> Tuple[List[SitemapResult], List[PageEntry]]:
	results: List[SitemapResult] = []
	pages: List[PageEntry] = []
	for e in entries:
		if isinstance(e, SitemapResult):
			results.append(e)
		elif isinstance(e, PageEntry):
			pages.append(e)
	return results, pages


def dedupe_pages(entries: Iterable[Entry]) -> List[PageEntry]:
	"""Unique page entries, first occurrence wins.

	URLs are compared exactly as given: case and trailing slashes matter.
	Sitemap results in the input are ignored.
	"""
	seen: Set[str] = set()
	unique: List[PageEntry] = []
	for e in entries:
		if not isinstance(e, PageEntry) or e.page in seen:
			continue
		seen.add(e.page)
		unique.append(e)
	return unique
