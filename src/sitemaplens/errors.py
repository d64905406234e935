# SitemapLens — Error taxonomy
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import Optional


class SitemapLensError(Exception):
	"""Base class for all SitemapLens errors."""


class InvalidRootUrlError(SitemapLensError, ValueError):
	"""Root site URL is not an absolute http(s) URL. Raised before any traversal."""


class FetchError(SitemapLensError):
	"""Transient network failure that survived every retry, or an undecodable payload."""

	def __init__(self, url: str, message: str) -> None:
		super().__init__(message)
		self.url = url


class SitemapNotFoundError(SitemapLensError):
	"""Deterministic miss: non-2xx status or an HTML page where XML was expected."""

	def __init__(self, url: str, status: int, content_type: Optional[str] = None) -> None:
		self.url = url
		self.status = status
		self.content_type = content_type or ""
		super().__init__(f"Sitemap not found at {url} (status: {status}, content-type: {self.content_type or 'n/a'})")


class SitemapParseError(SitemapLensError):
	"""Sitemap payload is not well-formed sitemap XML."""
