# SitemapLens — Configuration via Pydantic BaseSettings
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	"""Application settings with sane defaults.

	Environment variables are prefixed with SITEMAPLENS_. CLI flags can override.
	"""

	model_config = SettingsConfigDict(env_prefix="SITEMAPLENS_", env_file=".env", extra="ignore")

	user_agent: str = Field(default="SitemapLens/0.1 (+https://example.com)")
	timeout: float = Field(default=10.0, gt=0)
	retries: int = Field(default=3, ge=0)
	backoff: float = Field(default=0.3, ge=0)
	backoff_factor: float = Field(default=2.0, ge=1)
	min_delay: float = Field(default=0.0, ge=0)
	max_concurrency: int = Field(default=10, ge=1)
	output_dir: str = Field(default="output")
	report_format: Literal["csv", "jsonl"] = Field(default="csv")
	cache_enabled: bool = Field(default=False)
	cache_dir: str = Field(default=".http_cache")
	cache_ttl: Optional[float] = Field(default=None)
	log_level: str = Field(default="INFO")
	log_dir: str = Field(default="logs")
