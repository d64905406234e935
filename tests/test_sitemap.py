import pytest

from sitemaplens.core.sitemap import parse_sitemap
from sitemaplens.errors import SitemapParseError

from conftest import sitemapindex, urlset


def test_parse_urlset():
	parsed = parse_sitemap(urlset("https://example.com/a", "https://example.com/b").encode())
	assert parsed.kind == "urlset"
	assert not parsed.is_index
	assert parsed.locs == ["https://example.com/a", "https://example.com/b"]


def test_parse_index():
	parsed = parse_sitemap(sitemapindex("https://example.com/s1.xml").encode())
	assert parsed.is_index
	assert parsed.locs == ["https://example.com/s1.xml"]


def test_parse_without_namespace_and_leading_whitespace():
	body = b"""
		<urlset>
			<url><loc> https://example.com/a </loc><lastmod>2024-01-01</lastmod></url>
			<url><loc></loc></url>
		</urlset>
	"""
	assert parse_sitemap(body).locs == ["https://example.com/a"]


def test_only_direct_entries_count():
	body = b"""<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"
		xmlns:image="http://www.google.com/schemas/sitemap-image/1.1">
		<url><loc>https://example.com/a</loc>
			<image:image><image:loc>https://example.com/a.png</image:loc></image:image>
		</url>
	</urlset>"""
	assert parse_sitemap(body).locs == ["https://example.com/a"]


def test_malformed_xml():
	with pytest.raises(SitemapParseError):
		parse_sitemap(b"<urlset><url><loc>https://example.com/a</loc></url>")


def test_unsupported_root():
	with pytest.raises(SitemapParseError, match="rss"):
		parse_sitemap(b"<rss><channel/></rss>")
