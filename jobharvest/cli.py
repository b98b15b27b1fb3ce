"""
Command-line interface for crawling job posts.

Uses typer for clean CLI with subcommands.
"""

from pathlib import Path
from typing import List, Optional

import typer

from jobharvest.contexts.scraping.config import ConfigError, load_crawl_config
from jobharvest.contexts.scraping.listing import build_page_url
from jobharvest.contexts.scraping.orchestration import LOGS_PATH, no_progress, run_crawl
from jobharvest.contexts.scraping.permissions import check_crawl_permission

app = typer.Typer(
    add_completion=False,
    help="jobharvest classifieds job post crawler",
)


def _load_config_or_exit(config_files, overrides):
    try:
        return load_crawl_config(config_paths=config_files, overrides=overrides)
    except (ConfigError, FileNotFoundError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)


@app.command("run")
def run_command(
    pages: Optional[int] = typer.Option(
        None,
        "--pages",
        "-n",
        help="Number of listing pages to crawl",
        min=1,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="CSV file to write the job posts to",
    ),
    delay: Optional[float] = typer.Option(
        None,
        "--delay",
        "-d",
        help="Seconds to pause between requests",
        min=0.0,
    ),
    template: Optional[str] = typer.Option(
        None,
        "--template",
        "-t",
        help="Listing URL template containing {page}",
    ),
    config_files: Optional[List[Path]] = typer.Option(
        None,
        "--config",
        "-c",
        help="Extra YAML config merged over config/crawl.yaml (repeatable)",
    ),
    no_robots: bool = typer.Option(
        False,
        "--no-robots",
        help="Skip the robots.txt permission check",
    ),
    include_url: bool = typer.Option(
        False,
        "--include-url",
        help="Add the detail page URL as an extra column",
    ),
    log_dir: Path = typer.Option(
        LOGS_PATH,
        "--log-dir",
        help="Directory for log files",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Hide the progress bar (errors still logged)",
    ),
):
    """
    Crawl listing pages, parse every job post and write them to CSV.

    Examples:

        # Crawl with the defaults from config/crawl.yaml
        $ jobharvest run

        # Three pages, faster pacing, custom output
        $ jobharvest run -n 3 -d 1 -o outs/today.csv

        # Site-specific overrides
        $ jobharvest run -c config/local.yaml --include-url
    """
    overrides = {
        "page_count": pages,
        "output_path": str(output) if output is not None else None,
        "request_delay": delay,
        "listing_template": template,
        "respect_robots": False if no_robots else None,
        "include_url": True if include_url else None,
    }
    config = _load_config_or_exit(config_files, overrides)

    try:
        result = run_crawl(
            config,
            progress=no_progress if quiet else None,
            log_dir=log_dir,
        )
    except KeyboardInterrupt:
        typer.secho("\n\nInterrupted by user", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=130)

    if result["status"] != "success":
        typer.secho(f"Crawl failed: {result['error']}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(
        f"{result['rows_written']} job posts written to {result['output_path']} "
        f"({len(result['failed_addresses'])} skipped)",
        fg=typer.colors.GREEN,
    )


@app.command("check")
def check_command(
    config_files: Optional[List[Path]] = typer.Option(
        None,
        "--config",
        "-c",
        help="Extra YAML config merged over config/crawl.yaml (repeatable)",
    ),
):
    """Check whether robots.txt allows crawling the configured listing pages."""
    config = _load_config_or_exit(config_files, None)
    first_page_url = build_page_url(config.listing_template, 1)
    permission = check_crawl_permission(
        first_page_url,
        user_agent=config.user_agent or "*",
        timeout=float(config.request_timeout),
    )

    if permission.allowed:
        typer.secho(f"Allowed: {first_page_url}", fg=typer.colors.GREEN)
        if permission.crawl_delay is not None:
            typer.echo(f"Crawl-delay: {permission.crawl_delay}s")
    else:
        typer.secho(f"Disallowed by {permission.robots_url}: {first_page_url}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
