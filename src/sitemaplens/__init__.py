# SitemapLens — Package exports
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from .core.aggregate import dedupe_pages, split_entries
from .core.models import PageEntry, Provenance, SitemapResult, SitemapSource
from .core.robots import locate_sitemaps
from .core.traverse import traverse

__version__ = "0.1.0"

__all__ = [
	"PageEntry",
	"Provenance",
	"SitemapResult",
	"SitemapSource",
	"dedupe_pages",
	"locate_sitemaps",
	"split_entries",
	"traverse",
]
