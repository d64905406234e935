# SitemapLens — HTTP session and politeness helpers
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import asyncio
import time
from typing import Dict, Optional

import requests

from ..utils.net import build_session


class HostPacer:
	"""Per-host pacing using monotonic timestamps.

	Coroutine-safe; await before each request. Requests to the same host are
	serialized through a per-host lock only while the delay is being served.
	Locks belong to the running event loop and are recreated when the pacer
	is used from a new one; timestamps carry over.
	"""

	def __init__(self) -> None:
		self._locks: Dict[str, asyncio.Lock] = {}
		self._last: Dict[str, float] = {}
		self._loop: Optional[asyncio.AbstractEventLoop] = None

	def _lock_for(self, host: str) -> asyncio.Lock:
		loop = asyncio.get_running_loop()
		if loop is not self._loop:
			self._loop = loop
			self._locks = {}
		lock = self._locks.get(host)
		if lock is None:
			lock = asyncio.Lock()
			self._locks[host] = lock
		return lock

	async def wait(self, host: str, min_delay: float) -> None:
		if min_delay <= 0:
			return
		async with self._lock_for(host):
			last = self._last.get(host)
			now = time.monotonic()
			if last is not None:
				remaining = min_delay - (now - last)
				if remaining > 0:
					await asyncio.sleep(remaining)
			self._last[host] = time.monotonic()


def make_session(user_agent: str, pool_size: int = 10) -> requests.Session:
	return build_session(user_agent=user_agent, pool_size=pool_size)
