# SitemapLens — Async fetch layer: retry with backoff, gzip sniffing, sitemap gating
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import asyncio
import gzip
import logging
import zlib
from typing import Optional
from urllib.parse import urlparse

import requests

from ..errors import FetchError, SitemapNotFoundError
from ..storage.cache import ResponseCache
from .models import FetchResponse
from .session import HostPacer, make_session


logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "SitemapLens/0.1 (+https://example.com)"
GZIP_MAGIC = b"\x1f\x8b"

# Failures worth another attempt. HTTP status codes never are.
TRANSIENT_ERRORS = (
	requests.ConnectionError,
	requests.Timeout,
	requests.exceptions.ChunkedEncodingError,
)


def maybe_decompress(url: str, content_type: str, content: bytes) -> bytes:
	"""Gunzip payloads advertised as gzip.

	Bodies the transport already decoded (no magic bytes) pass through as-is.
	"""
	advertised = "gzip" in (content_type or "").lower() or urlparse(url).path.lower().endswith(".gz")
	if not advertised or not content.startswith(GZIP_MAGIC):
		return content
	try:
		return gzip.decompress(content)
	except (OSError, EOFError, zlib.error) as e:
		raise FetchError(url, f"Failed to decompress gzip payload from {url}: {e}") from e


class Fetcher:
	"""Resilient GET over a shared requests Session.

	Blocking calls run in worker threads so that every fetch is an await point
	and sibling fetches overlap. Transient network errors are retried with
	exponential backoff (``backoff * backoff_factor ** attempt`` seconds);
	``retries`` counts the attempts after the first one. ``timeout`` bounds
	each attempt as a whole, not only its connect and individual reads; an
	attempt that overruns it counts as a transient failure.

	A Fetcher may be reused across separate ``asyncio.run`` calls: the pacer
	rebinds its locks to whichever loop is running.
	"""

	def __init__(
		self,
		session: Optional[requests.Session] = None,
		user_agent: str = DEFAULT_USER_AGENT,
		timeout: float = 10.0,
		retries: int = 3,
		backoff: float = 0.3,
		backoff_factor: float = 2.0,
		cache: Optional[ResponseCache] = None,
		pacer: Optional[HostPacer] = None,
		min_delay: float = 0.0,
		pool_size: int = 10,
	) -> None:
		self.session = session if session is not None else make_session(user_agent, pool_size=pool_size)
		self.timeout = float(timeout)
		self.retries = max(0, int(retries))
		self.backoff = max(0.0, float(backoff))
		self.backoff_factor = max(1.0, float(backoff_factor))
		self.cache = cache
		self.min_delay = max(0.0, float(min_delay))
		self.pacer = pacer or (HostPacer() if self.min_delay > 0 else None)

	@classmethod
	def from_settings(cls, settings, session: Optional[requests.Session] = None) -> "Fetcher":
		cache = None
		if settings.cache_enabled:
			cache = ResponseCache(settings.cache_dir, ttl=settings.cache_ttl)
		return cls(
			session=session,
			user_agent=settings.user_agent,
			timeout=settings.timeout,
			retries=settings.retries,
			backoff=settings.backoff,
			backoff_factor=settings.backoff_factor,
			cache=cache,
			min_delay=settings.min_delay,
			pool_size=settings.max_concurrency,
		)

	async def get(self, url: str) -> FetchResponse:
		"""Fetch ``url``. Raises FetchError once retries are exhausted."""
		if self.cache is not None:
			cached = await asyncio.to_thread(self.cache.get, url)
			if cached is not None:
				logger.debug("Fetched %s from cache", url)
				return cached
		r = await self._get_with_retries(url)
		response = FetchResponse(url=r.url or url, status=int(r.status_code), headers=dict(r.headers or {}))
		response.content = maybe_decompress(url, response.content_type, r.content or b"")
		if self.cache is not None:
			await asyncio.to_thread(self.cache.put, url, response)
		return response

	async def get_sitemap(self, url: str) -> FetchResponse:
		"""Fetch a URL that must be a sitemap.

		Non-2xx statuses and HTML content types raise SitemapNotFoundError
		without retrying.
		"""
		response = await self.get(url)
		ctype = response.content_type.lower()
		if not response.ok or response.status == 404 or "text/html" in ctype:
			raise SitemapNotFoundError(url, response.status, response.content_type)
		return response

	async def _get_with_retries(self, url: str) -> requests.Response:
		host = urlparse(url).netloc
		attempt = 0
		while True:
			try:
				if self.pacer is not None:
					await self.pacer.wait(host, self.min_delay)
				return await self._send(url)
			except TRANSIENT_ERRORS as e:
				if attempt >= self.retries:
					raise FetchError(url, f"Failed to fetch {url} after {attempt + 1} attempts: {e}") from e
				delay = self.backoff * (self.backoff_factor ** attempt)
				logger.warning(
					"Error fetching %s: %s. Retrying in %.2fs (%d/%d)", url, e, delay, attempt + 1, self.retries
				)
				await asyncio.sleep(delay)
				attempt += 1
			except requests.RequestException as e:
				raise FetchError(url, f"Failed to fetch {url}: {e}") from e

	async def _send(self, url: str) -> requests.Response:
		# requests' timeout is per connect and per read; this bounds the whole
		# attempt. A timed-out worker thread is left to finish.
		call = asyncio.to_thread(self.session.get, url, timeout=self.timeout)
		if self.timeout <= 0:
			return await call
		try:
			return await asyncio.wait_for(call, timeout=self.timeout)
		except asyncio.TimeoutError as e:
			raise requests.Timeout(f"No complete response from {url} within {self.timeout:g}s") from e

	def close(self) -> None:
		self.session.close()
		if self.cache is not None:
			self.cache.close()

	async def __aenter__(self) -> "Fetcher":
		return self

	async def __aexit__(self, *exc) -> None:
		self.close()
