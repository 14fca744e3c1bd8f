"""Turn raw extracted fields into normalized, deduplicated drama records."""

from typing import Iterable, List, Optional

from ..constants.source import (
    DEFAULT_EPISODE_LABEL,
    DEFAULT_GENRES,
    DEFAULT_SUMMARY,
    MIN_TITLE_LENGTH,
    NAVIGATION_TITLE_MARKER,
    TARGET_URL,
)
from ..models.drama import DramaModel
from ..utils.urls import absolute_image_url, absolute_url
from .fields import RawFields


def is_usable_title(title: str) -> bool:
    """Reject empty, near-empty and navigation ("Home") titles."""
    title = title.strip()
    if len(title) < MIN_TITLE_LENGTH:
        return False
    return NAVIGATION_TITLE_MARKER not in title.lower()


def assemble_record(fields: RawFields, index: int = 1, base_url: str = TARGET_URL) -> Optional[DramaModel]:
    """
    Build one record from raw fields, or return None if it must be discarded.

    Args:
        fields: Raw values from the field extractor
        index: Position to use as the record id
        base_url: Origin for relative links and images

    Returns:
        DramaModel, or None when the title or link is unusable
    """
    if not is_usable_title(fields.title):
        return None
    if not fields.link.strip():
        return None

    return DramaModel(
        id=index,
        title=fields.title.strip(),
        episodes=fields.episode_label.strip() or DEFAULT_EPISODE_LABEL,
        genres=fields.genres or list(DEFAULT_GENRES),
        summary=fields.summary.strip() or DEFAULT_SUMMARY,
        image=absolute_image_url(fields.image_url, base_url),
        url=absolute_url(fields.link, base_url),
    )


def dedupe_records(records: Iterable[DramaModel]) -> List[DramaModel]:
    """Drop records whose url was already seen (first occurrence wins) and renumber ids from 1."""
    seen: set[str] = set()
    unique: List[DramaModel] = []
    for record in records:
        if record.identity in seen:
            continue
        seen.add(record.identity)
        unique.append(record.model_copy(update={"id": len(unique) + 1}))
    return unique


def assemble_records(raw_fields: Iterable[RawFields], base_url: str = TARGET_URL) -> List[DramaModel]:
    """Assemble every candidate in order, then deduplicate by url."""
    assembled = []
    for index, fields in enumerate(raw_fields, start=1):
        record = assemble_record(fields, index=index, base_url=base_url)
        if record is not None:
            assembled.append(record)
    return dedupe_records(assembled)
