import pytest

from sitemaplens.errors import InvalidRootUrlError
from sitemaplens.utils.urls import is_absolute_http, resolve, same_domain, same_site, validate_root_url


def test_validate_root_url():
	assert validate_root_url("  https://example.com ") == "https://example.com"
	with pytest.raises(InvalidRootUrlError):
		validate_root_url("www.example.com")
	with pytest.raises(ValueError):
		validate_root_url("javascript:alert(1)")


def test_resolve():
	assert resolve("https://example.com", "robots.txt") == "https://example.com/robots.txt"
	assert resolve("https://example.com/shop/", "sitemap.xml") == "https://example.com/shop/sitemap.xml"
	assert resolve("https://example.com", "https://cdn.example.net/s.xml") == "https://cdn.example.net/s.xml"


def test_is_absolute_http():
	assert is_absolute_http("http://example.com/a")
	assert not is_absolute_http("/a")
	assert not is_absolute_http("mailto:a@example.com")


def test_same_domain():
	assert same_domain("https://a.example.com/x", "https://A.example.com/y")
	assert not same_domain("https://a.example.com", "https://b.example.com")


def test_same_site():
	assert same_site("https://a.example.co.uk", "https://b.example.co.uk")
	assert not same_site("https://example.co.uk", "https://example.com")
