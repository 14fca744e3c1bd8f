"""Drama record model for scraped listing data."""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class DramaModel(BaseModel):
    """Pydantic model for one drama scraped from the listing page."""
    
    id: int = Field(..., description="1-based position within the extraction run")
    title: str = Field(..., min_length=3, description="Display title")
    episodes: str = Field(..., description="Free-text episode/status label")
    genres: List[str] = Field(..., min_length=1, description="Genre tags in page order")
    summary: str = Field(..., description="Short synopsis")
    image: Optional[str] = Field(default=None, description="Absolute poster image URL")
    url: str = Field(..., description="Absolute detail page URL, unique within a run")
    
    @property
    def identity(self) -> str:
        """Deduplication key."""
        return self.url
    
    def to_api(self) -> dict[str, Any]:
        """Serialize for the JSON API (``image`` is omitted when missing)."""
        return self.model_dump(exclude_none=True)
