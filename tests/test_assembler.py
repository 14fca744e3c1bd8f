"""Unit tests for record assembly, defaults and deduplication."""

import pytest

from deeper_api.scrapers.assembler import (
    assemble_record,
    assemble_records,
    dedupe_records,
    is_usable_title,
)
from deeper_api.scrapers.fields import RawFields

BASE = "https://deeper.id"


def raw(title="Queen of Tears", link="/d/1", **kwargs) -> RawFields:
    return RawFields(title=title, link=link, **kwargs)


class TestFiltering:

    @pytest.mark.parametrize("title", ["", "  ", "ab", " x "])
    def test_short_titles_discarded(self, title):
        assert assemble_record(raw(title=title), base_url=BASE) is None

    @pytest.mark.parametrize("title", ["Home", "HOME PAGE", "Back to homepage"])
    def test_navigation_titles_discarded(self, title):
        assert not is_usable_title(title)
        assert assemble_record(raw(title=title), base_url=BASE) is None

    def test_three_characters_kept(self):
        assert is_usable_title("Sky")

    def test_missing_link_discarded(self):
        assert assemble_record(raw(link=""), base_url=BASE) is None
        assert assemble_record(raw(link="   "), base_url=BASE) is None


class TestNormalization:

    def test_defaults_applied(self):
        record = assemble_record(raw(), index=4, base_url=BASE)

        assert record.id == 4
        assert record.episodes == "Unknown"
        assert record.genres == ["Drama"]
        assert record.summary == "No summary available."
        assert record.image is None
        assert record.url == "https://deeper.id/d/1"

    def test_scraped_values_kept(self):
        record = assemble_record(
            raw(
                title=" Moving ",
                link="https://deeper.id/d/moving",
                episode_label="Ep 20",
                image_url="//cdn.example/moving.jpg",
                genres=["Action", "Fantasy"],
                summary="Teenagers with hidden superpowers.",
            ),
            base_url=BASE,
        )

        assert record.title == "Moving"
        assert record.episodes == "Ep 20"
        assert record.genres == ["Action", "Fantasy"]
        assert record.summary == "Teenagers with hidden superpowers."
        assert record.image == "https://cdn.example/moving.jpg"
        assert record.url == "https://deeper.id/d/moving"
        assert record.identity == record.url

    def test_to_api_omits_missing_image(self):
        data = assemble_record(raw(), base_url=BASE).to_api()

        assert "image" not in data
        assert set(data) == {"id", "title", "episodes", "genres", "summary", "url"}


class TestDeduplication:

    def test_first_occurrence_wins(self):
        records = assemble_records(
            [
                raw(title="Alpha Drama", link="/u"),
                raw(title="Beta Drama", link="https://deeper.id/u"),
                raw(title="Gamma Drama", link="/v"),
            ],
            base_url=BASE,
        )

        assert [r.title for r in records] == ["Alpha Drama", "Gamma Drama"]
        assert [r.id for r in records] == [1, 2]

    def test_urls_unique_and_titles_valid(self):
        candidates = [
            raw(title="Home", link="/"),
            raw(title="Signal", link="/d/signal"),
            raw(title="Signal (again)", link="d/signal"),
            raw(title="OK", link="/d/ok"),
            raw(title="Kingdom", link=""),
            raw(title="Kingdom", link="/d/kingdom"),
        ]
        records = assemble_records(candidates, base_url=BASE)
        urls = [r.url for r in records]

        assert urls == ["https://deeper.id/d/signal", "https://deeper.id/d/kingdom"]
        assert len(set(urls)) == len(urls)
        assert all(len(r.title) > 2 and "home" not in r.title.lower() for r in records)

    def test_dedupe_records_empty(self):
        assert dedupe_records([]) == []
