"""Drama listing scraper for deeper.id."""

import asyncio
import sys
from typing import Callable, List, Optional

import aiohttp
from bs4 import BeautifulSoup

from ..constants.source import BLOCKED_STATUS_CODES, CHALLENGE_MARKERS, CHALLENGE_STATUS_CODES
from ..errors import BlockedError, FetchError, ParseError
from ..models.config import ScraperConfig
from ..models.drama import DramaModel
from .assembler import assemble_records
from .fields import extract_fields
from .selectors import select_candidates


def is_challenge_page(html: str) -> bool:
    """Check whether a response body is an edge-protection challenge page."""
    return any(marker in html for marker in CHALLENGE_MARKERS)


def parse_dramas(html: str, base_url: str) -> List[DramaModel]:
    """
    Parse listing page HTML into drama records.

    Args:
        html: Raw HTML content
        base_url: Origin used to resolve relative links and images

    Returns:
        Deduplicated records in page order (possibly empty)

    Raises:
        ParseError: If the markup cannot be handed to the parser at all
    """
    try:
        soup = BeautifulSoup(html, "html.parser")
    except Exception as e:
        raise ParseError(f"Could not parse listing page: {e}") from e

    selection = select_candidates(soup)
    with_details = selection.strategy == "primary"
    raw_fields = [extract_fields(element, with_details=with_details) for element in selection]
    records = assemble_records(raw_fields, base_url=base_url)

    print(
        f"Extracted {len(records)} dramas from {len(selection)} {selection.strategy} candidates",
        file=sys.stderr,
    )
    return records


async def fetch_page(session: aiohttp.ClientSession, url: str) -> str:
    """
    Fetch a page and return its body.

    Args:
        session: aiohttp session carrying headers and timeout
        url: Page URL to fetch

    Returns:
        Response body text

    Raises:
        BlockedError: On forbidden or edge-protection challenge responses
        FetchError: On any other non-2xx response, transport error or timeout
        ParseError: If the body cannot be decoded with its declared charset
    """
    try:
        async with session.get(url) as response:
            if response.status in BLOCKED_STATUS_CODES:
                raise BlockedError(
                    f"Access to {url} was blocked ({response.status}), likely by edge protection",
                    status=response.status,
                    url=url,
                )
            if not 200 <= response.status < 300:
                body = await response.text() if response.status in CHALLENGE_STATUS_CODES else ""
                if is_challenge_page(body):
                    raise BlockedError(
                        f"{url} answered with an edge-protection challenge ({response.status})",
                        status=response.status,
                        url=url,
                    )
                raise FetchError(f"Failed to fetch {url}: {response.status}", status=response.status, url=url)
            return await response.text()
    except UnicodeDecodeError as e:
        raise ParseError(f"Could not decode response from {url}: {e}") from e
    except asyncio.TimeoutError as e:
        raise FetchError(f"Timed out fetching {url}", url=url) from e
    except aiohttp.ClientError as e:
        raise FetchError(f"Failed to fetch {url}: {e}", url=url) from e


class DramaScraper:
    """Fetch the listing page and extract drama records from it."""

    def __init__(
        self,
        config: Optional[ScraperConfig] = None,
        session_factory: Optional[Callable[..., aiohttp.ClientSession]] = None,
    ):
        self.config = config or ScraperConfig()
        self._session_factory = session_factory or aiohttp.ClientSession

    def _open_session(self) -> aiohttp.ClientSession:
        return self._session_factory(
            headers={"User-Agent": self.config.user_agent},
            timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds),
        )

    async def run(self) -> List[DramaModel]:
        """
        Run one full extraction.

        Returns:
            Records scraped from the target page; an empty list means the page
            was fetched but its layout was not recognized
        """
        url = self.config.target_url
        print(f"Scraping {url}...", file=sys.stderr)

        try:
            async with self._open_session() as session:
                html = await fetch_page(session, url)
        except (FetchError, ParseError) as e:
            print(f"Scraping error: {e}", file=sys.stderr)
            raise

        return parse_dramas(html, base_url=url)

    async def __call__(self) -> List[DramaModel]:
        return await self.run()


async def scrape_dramas(config: Optional[ScraperConfig] = None) -> List[DramaModel]:
    """Scrape the listing page once with the given (or default) configuration."""
    return await DramaScraper(config).run()
