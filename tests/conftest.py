import gzip
import threading

import pytest
import requests

from sitemaplens.core.fetch import Fetcher


class MockResponse:
	def __init__(self, url, status_code=200, headers=None, content=b""):
		self.url = url
		self.status_code = status_code
		self.headers = headers or {}
		self.content = content if isinstance(content, bytes) else content.encode("utf-8")


class MockSession:
	"""requests.Session stand-in serving canned responses.

	Mapping values are ``(status, content_type, body)`` tuples, exceptions to
	raise, or lists consumed one item per call. Unknown URLs answer 404 HTML.
	"""

	def __init__(self, mapping=None):
		self.mapping = dict(mapping or {})
		self.calls = []
		self.headers = {"User-Agent": "test"}
		self._lock = threading.Lock()

	def get(self, url, timeout=None):
		with self._lock:
			self.calls.append(url)
			canned = self.mapping.get(url, (404, "text/html", "<html>not found</html>"))
			if isinstance(canned, list):
				canned = canned.pop(0) if len(canned) > 1 else canned[0]
		if isinstance(canned, BaseException) or (isinstance(canned, type) and issubclass(canned, BaseException)):
			raise canned
		status, ctype, body = canned
		return MockResponse(url, status, {"Content-Type": ctype}, body)

	def count(self, url):
		return self.calls.count(url)

	def close(self):
		pass


def urlset(*urls):
	entries = "".join(f"<url><loc>{u}</loc></url>" for u in urls)
	return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</urlset>'


def sitemapindex(*urls):
	entries = "".join(f"<sitemap><loc>{u}</loc></sitemap>" for u in urls)
	return f'<?xml version="1.0" encoding="UTF-8"?><sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</sitemapindex>'


def xml(body, status=200):
	return (status, "application/xml", body)


def gzipped(body, status=200):
	return (status, "application/x-gzip", gzip.compress(body.encode("utf-8")))


def html(body, status=200):
	return (status, "text/html; charset=utf-8", body)


@pytest.fixture
def make_fetcher():
	def factory(mapping=None, **kwargs):
		session = MockSession(mapping)
		kwargs.setdefault("backoff", 0)
		return Fetcher(session=session, **kwargs), session

	return factory


@pytest.fixture
def connection_error():
	return requests.ConnectionError("connection reset")
