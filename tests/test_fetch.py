import asyncio
import gzip
import time

import pytest
import requests

from sitemaplens.core import fetch as fetch_module
from sitemaplens.core.fetch import Fetcher, maybe_decompress
from sitemaplens.errors import FetchError, SitemapNotFoundError
from sitemaplens.storage.cache import ResponseCache

from conftest import MockSession, gzipped, html, urlset, xml


URL = "https://example.com/sitemap.xml"


def test_gzip_content_type_is_decompressed(make_fetcher):
	body = urlset("https://example.com/a")
	fetcher, _ = make_fetcher({URL: gzipped(body)})
	r = asyncio.run(fetcher.get(URL))
	assert r.text == body


def test_gzip_marker_without_magic_passes_through():
	assert maybe_decompress(URL, "application/x-gzip", b"<urlset/>") == b"<urlset/>"


def test_gz_extension_with_magic_is_decompressed():
	payload = gzip.compress(b"<urlset/>")
	assert maybe_decompress("https://example.com/s.xml.gz", "application/octet-stream", payload) == b"<urlset/>"


def test_corrupt_gzip_raises_fetch_error():
	with pytest.raises(FetchError):
		maybe_decompress(URL, "application/gzip", b"\x1f\x8bnot really gzip")


def test_retries_network_failures_then_succeeds(make_fetcher, connection_error):
	fetcher, session = make_fetcher({URL: [connection_error, requests.Timeout("slow"), xml("<urlset/>")]})
	r = asyncio.run(fetcher.get(URL))
	assert r.ok
	assert session.count(URL) == 3


def test_gives_up_after_retries(make_fetcher, connection_error):
	fetcher, session = make_fetcher({URL: [connection_error]}, retries=2)
	with pytest.raises(FetchError) as exc:
		asyncio.run(fetcher.get(URL))
	assert session.count(URL) == 3
	assert "after 3 attempts" in str(exc.value)


def test_backoff_doubles(make_fetcher, connection_error, monkeypatch):
	delays = []

	async def fake_sleep(seconds):
		delays.append(seconds)

	monkeypatch.setattr(fetch_module.asyncio, "sleep", fake_sleep)
	fetcher, _ = make_fetcher({URL: [connection_error]}, retries=3, backoff=0.3, backoff_factor=2)
	with pytest.raises(FetchError):
		asyncio.run(fetcher.get(URL))
	assert delays == pytest.approx([0.3, 0.6, 1.2])


def test_http_errors_are_not_retried(make_fetcher):
	fetcher, session = make_fetcher({URL: xml("oops", status=500)})
	r = asyncio.run(fetcher.get(URL))
	assert r.status == 500
	assert session.count(URL) == 1


def test_get_sitemap_rejects_html_and_missing(make_fetcher):
	fetcher, session = make_fetcher({URL: html("<html></html>")})
	with pytest.raises(SitemapNotFoundError) as exc:
		asyncio.run(fetcher.get_sitemap(URL))
	assert exc.value.status == 200
	with pytest.raises(SitemapNotFoundError) as exc:
		asyncio.run(fetcher.get_sitemap("https://example.com/missing.xml"))
	assert exc.value.status == 404
	assert session.count(URL) == 1


def test_cache_serves_repeat_requests(make_fetcher, tmp_path):
	cache = ResponseCache(str(tmp_path / "cache"))
	fetcher, session = make_fetcher({URL: xml(urlset("https://example.com/a"))}, cache=cache)
	first = asyncio.run(fetcher.get(URL))
	second = asyncio.run(fetcher.get(URL))
	assert session.count(URL) == 1
	assert second.content == first.content
	assert second.content_type == "application/xml"


def test_cache_skips_failed_responses(make_fetcher, tmp_path):
	cache = ResponseCache(str(tmp_path / "cache"))
	fetcher, session = make_fetcher({}, cache=cache)
	asyncio.run(fetcher.get(URL))
	asyncio.run(fetcher.get(URL))
	assert session.count(URL) == 2


def test_cache_entry_expires_after_ttl(make_fetcher, tmp_path):
	cache = ResponseCache(str(tmp_path / "cache"), ttl=0.05)
	fetcher, session = make_fetcher({URL: xml(urlset("https://example.com/a"))}, cache=cache)
	asyncio.run(fetcher.get(URL))
	assert URL in cache
	time.sleep(0.2)
	assert URL not in cache
	asyncio.run(fetcher.get(URL))
	assert session.count(URL) == 2
	fetcher.close()


class SlowSession(MockSession):
	def get(self, url, timeout=None):
		time.sleep(0.3)
		return super().get(url, timeout=timeout)


def test_timeout_bounds_the_whole_attempt():
	session = SlowSession({URL: xml(urlset("https://example.com/a"))})
	fetcher = Fetcher(session=session, timeout=0.05, retries=1, backoff=0)
	with pytest.raises(FetchError) as exc:
		asyncio.run(fetcher.get(URL))
	assert "after 2 attempts" in str(exc.value)
	assert "within 0.05s" in str(exc.value)
