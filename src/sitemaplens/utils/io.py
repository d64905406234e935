# SitemapLens — IO helpers (directories, JSONL writing, report file names)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import json
import os
import re
import threading
from typing import Any


_dir_lock = threading.Lock()
_jsonl_lock = threading.Lock()
_UNSAFE = re.compile(r"[^a-zA-Z0-9]")


def ensure_dirs(*paths: str) -> None:
	with _dir_lock:
		for p in paths:
			os.makedirs(p, exist_ok=True)


def append_jsonl(path: str, obj: Any) -> None:
	with _jsonl_lock:
		with open(path, "a", encoding="utf-8") as f:
			f.write(json.dumps(obj, ensure_ascii=False) + "\n")


def sanitize_filename(value: str) -> str:
	return _UNSAFE.sub("_", value).lower()


def report_file_name(site: str, title: str) -> str:
	return f"{sanitize_filename(title)}-{sanitize_filename(site)}"
