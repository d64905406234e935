# SitemapLens — CLI (Typer)
# Author: Sachin Chhetri
# Year: 2025
# License: MIT

import asyncio
from typing import Optional

import typer
from pydantic import ValidationError
from rich import print

from .config import Settings
from .core.audit import AuditSummary, SitemapAuditor
from .errors import InvalidRootUrlError
from .logging_config import configure_logging

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def common(
	ctx: typer.Context,
	user_agent: Optional[str] = typer.Option(None, help="Override User-Agent"),
	timeout: Optional[float] = typer.Option(None, help="Per-request timeout (seconds)"),
	retries: Optional[int] = typer.Option(None, help="Retries after a network failure"),
	backoff: Optional[float] = typer.Option(None, help="Initial retry delay (seconds), doubled per attempt"),
	concurrency: Optional[int] = typer.Option(None, help="Maximum concurrent requests"),
	delay: Optional[float] = typer.Option(None, help="Minimum delay per host (seconds)"),
	output_dir: Optional[str] = typer.Option(None, help="Report output directory"),
	report_format: Optional[str] = typer.Option(None, "--format", help="Report format: csv or jsonl"),
	cache: Optional[bool] = typer.Option(None, "--cache/--no-cache", help="Cache successful responses on disk"),
	log_level: Optional[str] = typer.Option(None, help="Log level"),
):
	"""Find sitemaps, walk them and audit the pages they list."""
	overrides = {
		"user_agent": user_agent,
		"timeout": timeout,
		"retries": retries,
		"backoff": backoff,
		"max_concurrency": concurrency,
		"min_delay": delay,
		"output_dir": output_dir,
		"report_format": report_format,
		"cache_enabled": cache,
		"log_level": log_level,
	}
	try:
		cfg = Settings(**{k: v for k, v in overrides.items() if v is not None})
	except ValidationError as e:
		raise typer.BadParameter(str(e)) from e
	if ctx.invoked_subcommand != "print-config":
		configure_logging(level=cfg.log_level, log_dir=cfg.log_dir)
	ctx.obj = cfg


def _run(ctx: typer.Context, make_coro):
	cfg: Settings = ctx.obj
	auditor = SitemapAuditor.from_settings(cfg)
	try:
		return asyncio.run(make_coro(auditor))
	except InvalidRootUrlError as e:
		raise typer.BadParameter(str(e), param_hint="ROOT") from e
	finally:
		auditor.fetcher.close()


def _print_summary(summary: AuditSummary) -> None:
	print({
		"audit": summary.audit_type,
		"issues": summary.amount_of_issues,
		"report": summary.location,
	})


@app.command()
def sitemap(
	ctx: typer.Context,
	root: str = typer.Argument(..., help="Site root URL, e.g. https://example.com"),
	sitemap_src: Optional[str] = typer.Option(None, "--sitemap", help="Explicit sitemap URL or path"),
):
	"""Audit every sitemap of a site and the pages they list."""
	print(f"[bold]Sitemap audit:[/bold] {root}")
	_print_summary(_run(ctx, lambda a: a.audit_sitemaps(root, sitemap_src)))


@app.command()
def urls(
	ctx: typer.Context,
	root: str = typer.Argument(..., help="Site root URL"),
	sitemap_src: Optional[str] = typer.Option(None, "--sitemap", help="Explicit sitemap URL or path"),
	count: bool = typer.Option(False, "--count", help="Only print the number of unique pages"),
):
	"""List the unique page URLs found in a site's sitemaps."""
	pages = _run(ctx, lambda a: a.collect_pages(root, sitemap_src))
	if count:
		typer.echo(len(pages))
		return
	for page in pages:
		typer.echo(page.page)


@app.command()
def canonical(
	ctx: typer.Context,
	root: str = typer.Argument(..., help="Site root URL"),
	sitemap_src: Optional[str] = typer.Option(None, "--sitemap", help="Explicit sitemap URL or path"),
	limit: Optional[int] = typer.Option(None, help="Check at most this many pages"),
):
	"""Check canonical links of sitemap pages against the sitemap."""
	print(f"[bold]Canonical audit:[/bold] {root}")
	_print_summary(_run(ctx, lambda a: a.audit_canonicals(root, sitemap_src, limit=limit)))


@app.command("broken-links")
def broken_links(
	ctx: typer.Context,
	root: str = typer.Argument(..., help="Site root URL"),
	sitemap_src: Optional[str] = typer.Option(None, "--sitemap", help="Explicit sitemap URL or path"),
	limit: int = typer.Option(100, help="Check at most this many pages (0 = all)"),
	same_site: bool = typer.Option(False, "--same-site", help="Treat subdomains of the same site as internal"),
):
	"""Find internal links that answer with a non-2xx status."""
	print(f"[bold]Broken internal links audit:[/bold] {root}")
	_print_summary(
		_run(ctx, lambda a: a.audit_broken_links(root, sitemap_src, limit=limit or None, site_scope=same_site))
	)


@app.command("print-config")
def print_config(ctx: typer.Context):
	"""Print effective configuration from environment and flags."""
	print(ctx.obj.model_dump())


def main():
	app()


if __name__ == "__main__":
	main()
