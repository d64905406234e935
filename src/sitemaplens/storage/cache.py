# SitemapLens — On-disk response cache injected into the fetch layer
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
from typing import Optional

import diskcache

from ..core.models import FetchResponse


logger = logging.getLogger(__name__)

DEFAULT_SIZE_LIMIT = 512 * 1024 * 1024


class ResponseCache:
	"""diskcache-backed store of successful responses, keyed by URL.

	Only 2xx responses are stored. ``ttl`` is in seconds and is handed to
	diskcache as the entry's ``expire``; ``None`` keeps entries until they
	are evicted by the size limit. Calls block on SQLite, so async callers
	should run them in a worker thread.
	"""

	def __init__(
		self,
		cache_dir: str = ".http_cache",
		ttl: Optional[float] = None,
		size_limit: int = DEFAULT_SIZE_LIMIT,
	) -> None:
		self.cache_dir = cache_dir
		self.ttl = ttl
		self._cache = diskcache.Cache(
			str(cache_dir),
			size_limit=size_limit,
			eviction_policy="least-recently-stored",
		)
		logger.debug("Opened response cache at %s (ttl=%s)", cache_dir, ttl)

	def get(self, url: str) -> Optional[FetchResponse]:
		data = self._cache.get(url)
		if data is None:
			return None
		return FetchResponse(
			url=data["url"],
			status=int(data["status"]),
			headers=dict(data["headers"]),
			content=data["content"],
		)

	def put(self, url: str, response: FetchResponse) -> None:
		if not response.ok:
			return
		entry = {
			"url": response.url,
			"status": response.status,
			"headers": dict(response.headers),
			"content": response.content,
		}
		try:
			self._cache.set(url, entry, expire=self.ttl)
		except diskcache.Timeout as e:
			logger.warning("Could not cache %s: %s", url, e)

	def __contains__(self, url: str) -> bool:
		return url in self._cache

	def close(self) -> None:
		self._cache.close()
