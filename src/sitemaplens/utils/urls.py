# SitemapLens — URL utilities: root validation, resolution and scope checks
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from urllib.parse import urljoin, urlparse

import tldextract

from ..errors import InvalidRootUrlError


# bundled public suffix snapshot only, no network lookups
_tld_extract = tldextract.TLDExtract(suffix_list_urls=())


def is_absolute_http(url: str) -> bool:
	p = urlparse(url or "")
	return p.scheme in ("http", "https") and bool(p.netloc)


def validate_root_url(url: str) -> str:
	"""Return the root URL stripped of surrounding whitespace, or fail fast.

	Only absolute http(s) URLs are accepted.
	"""
	candidate = (url or "").strip()
	try:
		ok = is_absolute_http(candidate)
	except ValueError:
		ok = False
	if not ok:
		raise InvalidRootUrlError(f"Root site URL must be an absolute http(s) URL, got: {url!r}")
	return candidate


def resolve(base: str, ref: str) -> str:
	"""Resolve ``ref`` against ``base``; absolute refs come back unchanged."""
	return urljoin(base, (ref or "").strip())


def same_domain(url_a: str, url_b: str) -> bool:
	try:
		return urlparse(url_a).netloc.lower() == urlparse(url_b).netloc.lower()
	except ValueError:
		return False


def etld_plus_one(netloc: str) -> str:
	ext = _tld_extract(netloc)
	return ".".join([p for p in [ext.domain, ext.suffix] if p]) or netloc


def same_site(url_a: str, url_b: str) -> bool:
	try:
		return etld_plus_one(urlparse(url_a).netloc.lower()) == etld_plus_one(urlparse(url_b).netloc.lower())
	except ValueError:
		return False


__all__ = [
	"is_absolute_http",
	"validate_root_url",
	"resolve",
	"same_domain",
	"same_site",
	"etld_plus_one",
]
