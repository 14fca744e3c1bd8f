"""Shared fixtures: fake scrapers, a controllable clock and fake aiohttp sessions."""

from datetime import datetime, timedelta, timezone

import aiohttp
import pytest

from deeper_api.models.drama import DramaModel


def make_drama(n: int, title: str | None = None, summary: str = "No summary available.") -> DramaModel:
    return DramaModel(
        id=n,
        title=title or f"Drama Number {n}",
        episodes="Unknown",
        genres=["Drama"],
        summary=summary,
        url=f"https://deeper.id/drama/{n}",
    )


class FakeClock:
    """Callable clock whose time only moves when a test says so."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class FakeScraper:
    """Async callable returning queued results; exceptions in the queue are raised."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


class FakeResponse:
    def __init__(self, status: int, body: str = "", raw: bytes | None = None):
        self.status = status
        self._body = body
        self._raw = raw

    async def text(self) -> str:
        # aiohttp decodes strictly with the declared charset
        if self._raw is not None:
            return self._raw.decode("utf-8")
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Stand-in for aiohttp.ClientSession that answers every GET the same way."""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None, **kwargs):
        self.response = response
        self.error = error
        self.kwargs = kwargs
        self.requested: list[str] = []

    def get(self, url: str):
        self.requested.append(url)
        if self.error is not None:
            raise self.error
        return self.response

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def dramas() -> list[DramaModel]:
    return [
        make_drama(1, "Queen of Tears", "A chaebol heiress and her husband."),
        make_drama(2, "Moving", "Teenagers with hidden superpowers."),
        make_drama(3, "Lovely Runner", "A fan travels back in time to save her idol."),
    ]


@pytest.fixture
def connection_error() -> aiohttp.ClientError:
    return aiohttp.ClientConnectionError("connection refused")
