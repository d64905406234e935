# SitemapLens — Networking utilities (requests session for the fetch layer)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import requests
from requests.adapters import HTTPAdapter


DEFAULT_ACCEPT = "application/xml,text/xml;q=0.9,text/html;q=0.8,*/*;q=0.5"


def build_session(user_agent: str, pool_size: int = 10) -> requests.Session:
	"""Build a requests Session shared by all concurrent fetches.

	The adapter never retries on its own: retry with backoff lives in the
	async fetch layer so it only covers network-level failures. The pool is
	sized to the fetch concurrency so worker threads don't block on it.
	"""
	s = requests.Session()
	s.headers.update(
		{
			"User-Agent": user_agent,
			"Accept": DEFAULT_ACCEPT,
		}
	)
	size = max(1, int(pool_size))
	adapter = HTTPAdapter(pool_connections=size, pool_maxsize=size, max_retries=0)
	s.mount("http://", adapter)
	s.mount("https://", adapter)
	return s
