"""Source site and extraction constants."""

from pathlib import Path

# Source site
TARGET_URL = "https://deeper.id"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
FETCH_TIMEOUT_SECONDS = 8.0
CACHE_TTL_SECONDS = 10 * 60

# Candidate selection
PRIMARY_CONTAINER_SELECTORS = (".card", ".item", ".drama-item", ".drama-card", "article")
FALLBACK_ANCHOR_SELECTOR = "a:has(img)"

# Field lookups
HEADING_SELECTOR = "h1, h2, h3, h4, .title, a.name"
EPISODE_SELECTOR = ".episode, .ep-status, .status"
EPISODE_TEXT_MARKER = "Ep"
GENRE_SELECTOR = ".genre, .tag"
SUMMARY_SELECTOR = ".summary, .description, p"

# Record defaults
DEFAULT_EPISODE_LABEL = "Unknown"
DEFAULT_GENRES = ("Drama",)
DEFAULT_SUMMARY = "No summary available."
MIN_TITLE_LENGTH = 3
NAVIGATION_TITLE_MARKER = "home"

# Edge-protection challenge pages
BLOCKED_STATUS_CODES = (403,)
CHALLENGE_STATUS_CODES = (429, 503)
CHALLENGE_MARKERS = ("Attention Required! | Cloudflare", "Just a moment...", "cf-browser-verification")

# Static dashboard
STATIC_DIR = Path(__file__).parent.parent / "static"
