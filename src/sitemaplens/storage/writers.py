# SitemapLens — Report sinks (CSV, JSONL, in-memory)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import csv
import logging
import os
import time
from typing import Any, Dict, List, Optional, Protocol

from ..utils.io import append_jsonl, ensure_dirs, report_file_name


logger = logging.getLogger(__name__)


class ReportSink(Protocol):
	rows: List[Dict[str, Any]]

	def add_row(self, row: Dict[str, Any]) -> None:
		...

	def end(self) -> Optional[str]:
		...


class Report:
	"""Collects audit rows over a fixed set of headers and defaults.

	Subclasses decide where the rows go when ``end()`` is called.
	"""

	extension = ""

	def __init__(self, title: str, site: str, output_dir: str = "output") -> None:
		self.title = title
		self.site = site
		self.output_dir = output_dir
		self.rows: List[Dict[str, Any]] = []
		self.headers_and_defaults: Dict[str, Any] = {}
		self.report_path: Optional[str] = None
		if self.extension:
			name = f"{report_file_name(site, title)}-{int(time.time() * 1000)}{self.extension}"
			self.report_path = os.path.join(output_dir, name)
		self._started = time.monotonic()

	def set_row_headers_and_defaults(self, defaults: Dict[str, Any]) -> None:
		self.headers_and_defaults = dict(defaults)

	def add_row(self, row: Dict[str, Any]) -> None:
		merged = dict(self.headers_and_defaults)
		merged.update(row)
		self.rows.append(merged)

	def fieldnames(self) -> List[str]:
		names = list(self.headers_and_defaults)
		for row in self.rows:
			for key in row:
				if key not in names:
					names.append(key)
		return names

	def end(self) -> Optional[str]:
		elapsed = time.monotonic() - self._started
		logger.info("%s: %d row(s) for %s in %.1fs", self.title, len(self.rows), self.site, elapsed)
		if self.report_path:
			ensure_dirs(self.output_dir)
			self._write()
			logger.info("Report written to %s", self.report_path)
		return self.report_path

	def _write(self) -> None:
		pass


class MemoryReport(Report):
	"""Keeps rows in memory only."""


class CsvReport(Report):
	extension = ".csv"

	def _write(self) -> None:
		with open(self.report_path, "w", encoding="utf-8", newline="") as f:
			writer = csv.DictWriter(f, fieldnames=self.fieldnames(), restval="")
			writer.writeheader()
			writer.writerows(self.rows)


class JsonlReport(Report):
	extension = ".jsonl"

	def _write(self) -> None:
		for row in self.rows:
			append_jsonl(self.report_path, row)


REPORT_FORMATS = {
	"csv": CsvReport,
	"jsonl": JsonlReport,
	"memory": MemoryReport,
}


def make_report(fmt: str, title: str, site: str, output_dir: str = "output") -> Report:
	try:
		cls = REPORT_FORMATS[fmt.lower()]
	except KeyError:
		raise ValueError(f"Unknown report format: {fmt!r} (expected one of {', '.join(REPORT_FORMATS)})") from None
	return cls(title, site, output_dir=output_dir)
