from __future__ import annotations

import os
from typing import List, Optional

import typer
from dotenv import load_dotenv

from .version import __version__
from .utils.logging import get_logger, setup_logger
from .pipeline import Report, RunConfig, run


app = typer.Typer(add_completion=False, help="Check URLs against a robots.txt file.")

SOURCE_HELP = "robots.txt file path, or - for stdin"


def _default_user_agent() -> str:
    return os.getenv("ROBOTSTXT_USER_AGENT") or f"robotstxt/{__version__}"


def _run_or_exit(cfg: RunConfig) -> Report:
    setup_logger(cfg.log_level)
    try:
        return run(cfg)
    except OSError as e:
        get_logger().error(f"Cannot read {cfg.source}: {e}")
        raise typer.Exit(code=2)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Print version and exit"),
):
    # Load environment variables from .env if present
    load_dotenv()
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command()
def check(
    source: str = typer.Argument(..., help=SOURCE_HELP),
    urls: List[str] = typer.Argument(..., help="URL paths to check"),
    user_agent: Optional[str] = typer.Option(None, "-a", "--user-agent", help="Crawler user agent (default: $ROBOTSTXT_USER_AGENT)"),
    status: int = typer.Option(200, "--status", help="HTTP status the robots.txt was served with"),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level"),
):
    """Print allowed/denied for each URL; exit 1 if any is denied."""
    cfg = RunConfig(source=source, user_agent=user_agent or _default_user_agent(), urls=urls, status_code=status, log_level=log_level)
    report = _run_or_exit(cfg)
    for v in report.verdicts:
        typer.echo(f"{'allowed' if v.allowed else 'denied'}\t{v.url}")
    if not report.all_allowed():
        raise typer.Exit(code=1)


@app.command()
def info(
    source: str = typer.Argument(..., help=SOURCE_HELP),
    user_agent: Optional[str] = typer.Option(None, "-a", "--user-agent", help="Crawler user agent (default: $ROBOTSTXT_USER_AGENT)"),
    status: int = typer.Option(200, "--status", help="HTTP status the robots.txt was served with"),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level"),
):
    """Print crawl-delay, request-rate and sitemaps for a user agent."""
    cfg = RunConfig(source=source, user_agent=user_agent or _default_user_agent(), status_code=status, log_level=log_level)
    report = _run_or_exit(cfg)
    delay = report.crawl_delay.total_seconds() if report.crawl_delay is not None else "-"
    rate = f"{report.request_rate.requests}/{report.request_rate.seconds}" if report.request_rate else "-"
    typer.echo(f"user-agent: {report.user_agent}")
    typer.echo(f"crawl-delay: {delay}")
    typer.echo(f"request-rate: {rate}")
    if report.sitemaps:
        for url in report.sitemaps:
            typer.echo(f"sitemap: {url}")
    else:
        typer.echo("sitemap: -")
    typer.echo(f"groups: {report.group_count}")
    typer.echo(f"default-group: {'yes' if report.has_default_group else 'no'}")


def entrypoint():
    app()

if __name__ == "__main__":
    entrypoint()
