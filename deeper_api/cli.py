"""CLI entry point for scraping and serving drama data."""

import asyncio
import json
import sys

import click

from .errors import FetchError, ParseError
from .models.config import ScraperConfig


@click.group()
def cli():
    """Deeper Drama API - scrape deeper.id and serve it as JSON."""
    pass


@cli.command("scrape")
@click.option("--url", default=None, help="Listing page to scrape (default: https://deeper.id)")
@click.option(
    "--timeout",
    default=None,
    type=click.FloatRange(1, 10),
    help="Fetch timeout in seconds, 1-10 (default: 8)"
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the scraped records to this JSON file"
)
def scrape(url: str | None, timeout: float | None, output: str | None):
    """Scrape the listing page once and print what was found.

    Examples:

        deeper scrape

        deeper scrape --output dramas.json

        deeper scrape --url https://deeper.id --timeout 10
    """
    from .scrapers.dramas import scrape_dramas

    overrides = {}
    if url:
        overrides["target_url"] = url
    if timeout is not None:
        overrides["timeout_seconds"] = timeout
    config = ScraperConfig.model_validate({**ScraperConfig.from_env().model_dump(), **overrides})

    try:
        records = asyncio.run(scrape_dramas(config))
    except (FetchError, ParseError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for record in records:
        click.echo(f"[{record.id}] {record.title} ({record.episodes}) - {record.url}")
    click.echo(f"\nScraped {len(records)} dramas from {config.target_url}")

    if output:
        with open(output, "w", encoding="utf-8") as f:
            json.dump([record.to_api() for record in records], f, indent=2, ensure_ascii=False)
        click.echo(f"Saved to {output}")


@cli.command("serve")
@click.option(
    "--port",
    default=3000,
    type=int,
    envvar="PORT",
    help="Port to run the server on (default: $PORT or 3000)"
)
@click.option(
    "--host",
    default="0.0.0.0",
    help="Host to bind to (default: 0.0.0.0)"
)
@click.option("--debug", is_flag=True, help="Run Flask in debug mode")
def serve(port: int, host: str, debug: bool):
    """Start the drama API web server.

    Examples:

        deeper serve

        deeper serve --port 8080
    """
    from .server import run_server
    run_server(host=host, port=port, debug=debug)


if __name__ == "__main__":
    cli()
