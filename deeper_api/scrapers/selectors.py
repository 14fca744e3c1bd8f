"""Candidate element selection for the listing page."""

from dataclasses import dataclass, field
from typing import List, Literal

from bs4 import BeautifulSoup, Tag

from ..constants.source import FALLBACK_ANCHOR_SELECTOR, PRIMARY_CONTAINER_SELECTORS

Strategy = Literal["primary", "fallback", "none"]


@dataclass
class CandidateSelection:
    """Candidate elements in document order, and which strategy found them."""
    
    strategy: Strategy
    elements: List[Tag] = field(default_factory=list)
    
    def __len__(self) -> int:
        return len(self.elements)
    
    def __iter__(self):
        return iter(self.elements)


def select_primary(soup: BeautifulSoup) -> List[Tag]:
    """Elements carrying one of the known container classes or content tags."""
    # A grouped selector returns each match once, in document order
    return soup.select(", ".join(PRIMARY_CONTAINER_SELECTORS))


def select_fallback(soup: BeautifulSoup) -> List[Tag]:
    """Every anchor that wraps an image, as found in thumbnail grids."""
    return soup.select(FALLBACK_ANCHOR_SELECTOR)


def select_candidates(soup: BeautifulSoup) -> CandidateSelection:
    """
    Pick the candidate elements to extract records from.
    
    The primary strategy wins whenever it finds anything; the fallback only
    runs on pages where no known container is present. An empty selection is
    not an error, it just means the page layout was not recognized.
    
    Args:
        soup: Parsed listing page
        
    Returns:
        CandidateSelection with the strategy used and the matched elements
    """
    primary = select_primary(soup)
    if primary:
        return CandidateSelection(strategy="primary", elements=primary)
    
    fallback = select_fallback(soup)
    if fallback:
        return CandidateSelection(strategy="fallback", elements=fallback)
    
    return CandidateSelection(strategy="none")
