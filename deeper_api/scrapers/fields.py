"""Field-level extraction from a single candidate element.

Every field is described by an ordered chain of small extractor functions.
Each one looks at the element in one specific way and returns a string or
None; the first non-empty, trimmed result wins. No extractor raises, so a
malformed candidate just yields empty fields.
"""

from typing import Callable, List, Optional, Sequence

from bs4 import NavigableString, Tag
from pydantic import BaseModel, Field

from ..constants.source import (
    EPISODE_SELECTOR,
    EPISODE_TEXT_MARKER,
    GENRE_SELECTOR,
    HEADING_SELECTOR,
    SUMMARY_SELECTOR,
)

Extractor = Callable[[Tag], Optional[str]]


class RawFields(BaseModel):
    """Unnormalized values pulled from one candidate element."""

    title: str = ""
    link: str = ""
    episode_label: str = ""
    image_url: str = ""
    genres: List[str] = Field(default_factory=list)
    summary: str = ""


def _attr(element: Optional[Tag], name: str) -> Optional[str]:
    if element is None:
        return None
    value = element.get(name)
    # Multi-valued attributes (class, rel) come back as lists
    if isinstance(value, list):
        value = " ".join(value)
    return value


def _text(element: Optional[Tag]) -> Optional[str]:
    if element is None:
        return None
    return element.get_text(" ", strip=True)


def _first_image(element: Tag) -> Optional[Tag]:
    if element.name == "img":
        return element
    return element.find("img")


# Title

def title_from_own_attribute(element: Tag) -> Optional[str]:
    return _attr(element, "title")


def title_from_image_alt(element: Tag) -> Optional[str]:
    return _attr(_first_image(element), "alt")


def title_from_heading(element: Tag) -> Optional[str]:
    return _text(element.select_one(HEADING_SELECTOR))


def title_from_own_text(element: Tag) -> Optional[str]:
    return _text(element)


# Link

def link_from_own_href(element: Tag) -> Optional[str]:
    return _attr(element, "href")


def link_from_descendant_anchor(element: Tag) -> Optional[str]:
    return _attr(element.find("a", href=True), "href")


# Episode label

def episode_from_status_marker(element: Tag) -> Optional[str]:
    return _text(element.select_one(EPISODE_SELECTOR))


def episode_from_text_marker(element: Tag) -> Optional[str]:
    match = element.find(
        string=lambda s: type(s) is NavigableString and EPISODE_TEXT_MARKER in s
    )
    return str(match) if match is not None else None


# Image

def image_from_src(element: Tag) -> Optional[str]:
    return _attr(_first_image(element), "src")


def image_from_lazy_src(element: Tag) -> Optional[str]:
    return _attr(_first_image(element), "data-src")


TITLE_EXTRACTORS: Sequence[Extractor] = (
    title_from_own_attribute,
    title_from_image_alt,
    title_from_heading,
    title_from_own_text,
)
LINK_EXTRACTORS: Sequence[Extractor] = (
    link_from_own_href,
    link_from_descendant_anchor,
)
EPISODE_EXTRACTORS: Sequence[Extractor] = (
    episode_from_status_marker,
    episode_from_text_marker,
)
IMAGE_EXTRACTORS: Sequence[Extractor] = (
    image_from_src,
    image_from_lazy_src,
)


def first_match(element: Tag, extractors: Sequence[Extractor]) -> str:
    """Run extractors in order and return the first non-empty trimmed value, or ``""``."""
    for extractor in extractors:
        value = extractor(element)
        if value and value.strip():
            return value.strip()
    return ""


def extract_genres(element: Tag) -> List[str]:
    """Genre/tag labels in page order, without blanks or repeats."""
    genres: List[str] = []
    for tag in element.select(GENRE_SELECTOR):
        genre = tag.get_text(" ", strip=True)
        if genre and genre not in genres:
            genres.append(genre)
    return genres


def extract_summary(element: Tag) -> str:
    return _text(element.select_one(SUMMARY_SELECTOR)) or ""


def extract_fields(element: Tag, with_details: bool = False) -> RawFields:
    """
    Pull the raw record fields out of one candidate element.

    Args:
        element: Candidate element from the selector
        with_details: Also scrape genres and summary (content blocks only;
            fallback anchors never carry them)

    Returns:
        RawFields with empty strings for anything that could not be found
    """
    fields = RawFields(
        title=first_match(element, TITLE_EXTRACTORS),
        link=first_match(element, LINK_EXTRACTORS),
        episode_label=first_match(element, EPISODE_EXTRACTORS),
        image_url=first_match(element, IMAGE_EXTRACTORS),
    )
    if with_details:
        fields.genres = extract_genres(element)
        fields.summary = extract_summary(element)
    return fields
