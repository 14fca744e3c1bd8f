"""Runtime configuration for the scraper and cache."""

import os
from datetime import timedelta

from pydantic import BaseModel, Field

from ..constants.source import (
    CACHE_TTL_SECONDS,
    FETCH_TIMEOUT_SECONDS,
    TARGET_URL,
    USER_AGENT,
)


class ScraperConfig(BaseModel):
    """Configuration used for fetching and caching the listing page."""
    
    target_url: str = Field(default=TARGET_URL, description="Listing page to scrape, also the base for relative links")
    user_agent: str = Field(default=USER_AGENT, description="Browser-like User-Agent header")
    timeout_seconds: float = Field(
        default=FETCH_TIMEOUT_SECONDS,
        ge=1,
        le=10,
        description="Total timeout for one page fetch"
    )
    cache_ttl_seconds: int = Field(
        default=CACHE_TTL_SECONDS,
        gt=0,
        description="How long a successful extraction is served from cache"
    )
    
    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(seconds=self.cache_ttl_seconds)
    
    @classmethod
    def from_env(cls) -> "ScraperConfig":
        """Build a config from ``DEEPER_*`` environment variables, keeping defaults for unset ones."""
        overrides = {}
        env_fields = {
            "DEEPER_TARGET_URL": "target_url",
            "DEEPER_USER_AGENT": "user_agent",
            "DEEPER_TIMEOUT_SECONDS": "timeout_seconds",
            "DEEPER_CACHE_TTL_SECONDS": "cache_ttl_seconds",
        }
        for env_name, field_name in env_fields.items():
            value = os.environ.get(env_name)
            if value:
                overrides[field_name] = value
        return cls(**overrides)
