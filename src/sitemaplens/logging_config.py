# SitemapLens — Logging configuration (rotating file + stderr)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import logging
import logging.handlers
import os
import sys


LOG_FORMAT = "%(asctime)s\t%(levelname)s\t%(name)s\t%(message)s"
NOISY_LOGGERS = ("urllib3", "filelock")


def configure_logging(level: str = "INFO", log_dir: str = "logs") -> None:
	"""Configure root logger with a rotating file handler and stderr.

	Console output goes to stderr so commands that print URLs keep stdout
	clean. Connection-pool chatter is capped at WARNING.
	"""
	os.makedirs(log_dir, exist_ok=True)
	log_path = os.path.join(log_dir, "sitemaplens.log")
	formatter = logging.Formatter(LOG_FORMAT)

	root = logging.getLogger()
	root.setLevel(getattr(logging, level.upper(), logging.INFO))

	# re-init replaces handlers
	for h in list(root.handlers):
		root.removeHandler(h)
		h.close()

	stream = logging.StreamHandler(sys.stderr)
	stream.setFormatter(formatter)
	root.addHandler(stream)

	file_handler = logging.handlers.RotatingFileHandler(
		log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
	)
	file_handler.setFormatter(formatter)
	root.addHandler(file_handler)

	for name in NOISY_LOGGERS:
		logging.getLogger(name).setLevel(max(root.level, logging.WARNING))
