# SitemapLens — Sitemap traversal engine (work queue, cycle guard, partial failures)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import asyncio
import logging
from typing import Iterable, List, Optional, Set, Tuple

from ..errors import FetchError, SitemapNotFoundError, SitemapParseError
from ..utils.urls import is_absolute_http, resolve
from .fetch import Fetcher
from .models import Entry, PageEntry, Provenance, SitemapResult, SitemapSource
from .sitemap import parse_sitemap


logger = logging.getLogger(__name__)

EMPTY_SITEMAP_WARNING = "Sitemap contains no entries"

NodeOutcome = Tuple[SitemapResult, List[PageEntry], List[SitemapSource]]


class TraversalContext:
	"""Per-run registry of sitemap URLs already claimed for fetching.

	One instance per traversal so concurrent runs for different sites never
	share state.
	"""

	def __init__(self) -> None:
		self.visited: Set[str] = set()

	def claim(self, url: str) -> bool:
		# no await between check and add: atomic relative to other tasks
		if url in self.visited:
			return False
		self.visited.add(url)
		return True


class SitemapTraverser:
	"""Expands sitemap sources into sitemap results and page entries.

	Nodes run as independent asyncio tasks pulled from a work queue: a parsed
	index enqueues its children, every URL is claimed in the context before
	it is fetched, and a failing node only produces an error result.
	"""

	def __init__(
		self,
		fetcher: Fetcher,
		max_concurrency: Optional[int] = None,
		context: Optional[TraversalContext] = None,
	) -> None:
		self.fetcher = fetcher
		self.context = context or TraversalContext()
		self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

	async def run(self, sources: Iterable[SitemapSource]) -> List[Entry]:
		entries: List[Entry] = []
		pending: Set[asyncio.Task] = set()
		for source in sources:
			self._schedule(source, pending)
		while pending:
			done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
			for task in done:
				result, pages, children = task.result()
				entries.append(result)
				entries.extend(pages)
				for child in children:
					self._schedule(child, pending)
		return entries

	def _schedule(self, source: SitemapSource, pending: Set[asyncio.Task]) -> None:
		if not self.context.claim(source.url):
			logger.debug("Skipping already visited sitemap %s", source.url)
			return
		if source.provenance == Provenance.SITEMAP_INDEX:
			logger.info("Found sitemap in index %s: %s", source.parent, source.url)
		pending.add(asyncio.ensure_future(self._visit(source)))

	async def _fetch(self, url: str):
		if self._semaphore is None:
			return await self.fetcher.get_sitemap(url)
		async with self._semaphore:
			return await self.fetcher.get_sitemap(url)

	async def _visit(self, source: SitemapSource) -> NodeOutcome:
		result = SitemapResult(url=source.url, source=source.provenance.value, parent=source.parent)
		try:
			response = await self._fetch(source.url)
			parsed = parse_sitemap(response.content)
		except (FetchError, SitemapNotFoundError, SitemapParseError) as e:
			logger.warning("Error in %s: %s (source: %s)", source.url, e, result.source)
			result.error = str(e)
			return result, [], []
		except Exception as e:
			logger.exception("Unexpected error while processing sitemap %s", source.url)
			result.error = f"Unexpected error: {e}"
			return result, [], []

		result.kind = parsed.kind
		warnings: List[str] = []
		targets: List[str] = []
		relative = 0
		for loc in parsed.locs:
			if is_absolute_http(loc):
				targets.append(loc)
				continue
			target = resolve(source.url, loc)
			if is_absolute_http(target):
				targets.append(target)
				relative += 1
		if relative:
			warnings.append(f"{relative} relative loc(s) resolved against {source.url}")
		if len(targets) < len(parsed.locs):
			warnings.append(f"{len(parsed.locs) - len(targets)} loc(s) skipped: not an http(s) URL")
		if not targets:
			warnings.append(EMPTY_SITEMAP_WARNING)
		result.locs = len(targets)
		result.warning = "; ".join(warnings) or None

		if parsed.is_index:
			children = [SitemapSource(u, Provenance.SITEMAP_INDEX, parent=source.url) for u in targets]
			return result, [], children
		pages = [PageEntry(page=u, source=source.url) for u in targets]
		logger.info("Parsed %s: %d page(s)", source.url, len(pages))
		return result, pages, []


async def traverse(
	sources: Iterable[SitemapSource],
	fetcher: Fetcher,
	max_concurrency: Optional[int] = None,
	context: Optional[TraversalContext] = None,
) -> List[Entry]:
	"""Flat list of SitemapResult (``url``) and PageEntry (``page``) items.

	Never raises for per-sitemap problems; each failure is reported on that
	sitemap's result.
	"""
	traverser = SitemapTraverser(fetcher, max_concurrency=max_concurrency, context=context)
	return await traverser.run(sources)
