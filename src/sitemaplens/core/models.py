# SitemapLens — Data model: sitemap sources, results, page entries
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union


class Provenance(str, Enum):
	"""How a sitemap URL was discovered."""

	ROBOTS_TXT = "robots.txt"
	DEFAULT_PATH = "default-path"
	SITEMAP_INDEX = "sitemap-index"
	USER_PROVIDED = "user-provided"


SITEMAP_KIND_URLSET = "urlset"
SITEMAP_KIND_INDEX = "sitemapindex"


@dataclass(frozen=True)
class SitemapSource:
	url: str
	provenance: Provenance
	parent: Optional[str] = None


@dataclass
class SitemapResult:
	"""Outcome of fetching and parsing one sitemap.

	``locs`` is the number of direct entries: page URLs for a urlset, child
	sitemaps for an index. Failed sitemaps carry ``error`` instead.
	"""

	url: str
	source: str
	parent: Optional[str] = None
	kind: Optional[str] = None
	locs: Optional[int] = None
	error: Optional[str] = None
	warning: Optional[str] = None

	@property
	def failed(self) -> bool:
		return self.error is not None

	def to_row(self) -> Dict[str, Any]:
		return {
			"sitemapOrPage": self.url,
			"source": self.source,
			"locs": self.locs if self.locs is not None else 0,
			"error": self.error or "",
			"warning": self.warning or "",
		}


@dataclass(frozen=True)
class PageEntry:
	page: str
	source: str

	def to_row(self) -> Dict[str, Any]:
		return {"sitemapOrPage": self.page, "source": self.source}


Entry = Union[SitemapResult, PageEntry]


@dataclass
class FetchResponse:
	"""Transport-neutral view of an HTTP response. ``content`` is already decompressed."""

	url: str
	status: int
	headers: Mapping[str, str] = field(default_factory=dict)
	content: bytes = b""

	@property
	def ok(self) -> bool:
		return 200 <= self.status < 300

	@property
	def content_type(self) -> str:
		for key, value in self.headers.items():
			if key.lower() == "content-type":
				return value or ""
		return ""

	@property
	def text(self) -> str:
		return self.content.decode("utf-8", errors="replace")
