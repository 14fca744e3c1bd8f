"""Flask server exposing the scraped drama listing as a JSON API."""

from datetime import datetime, timezone
from typing import Optional

from flask import Flask, Response, current_app, jsonify, request, send_from_directory
from flask_cors import CORS

from .cache.coordinator import RefreshCoordinator
from .constants.source import STATIC_DIR
from .errors import NoDataAvailable
from .models.config import ScraperConfig
from .scrapers.dramas import DramaScraper

ENDPOINTS = {
    "getAllDramas": "/api/dramas",
    "search": "/api/search?q=keyword",
    "clearCache": "/api/clear-cache",
}


def to_iso(moment: Optional[datetime]) -> Optional[str]:
    """Format a timestamp as UTC ISO-8601 with millisecond precision and a ``Z`` suffix."""
    if moment is None:
        return None
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def get_coordinator() -> RefreshCoordinator:
    """Get the refresh coordinator owned by the current app."""
    return current_app.extensions["deeper_coordinator"]


def create_app(
    coordinator: Optional[RefreshCoordinator] = None,
    config: Optional[ScraperConfig] = None,
) -> Flask:
    """
    Build the Flask app.

    Args:
        coordinator: Coordinator to serve from (one is built from config if omitted)
        config: Scraper configuration (read from the environment if omitted)

    Returns:
        Configured Flask app
    """
    if coordinator is None:
        config = config or ScraperConfig.from_env()
        coordinator = RefreshCoordinator(DramaScraper(config), ttl=config.cache_ttl)

    app = Flask(__name__, static_folder=str(STATIC_DIR))
    app.json.sort_keys = False
    app.extensions["deeper_coordinator"] = coordinator
    CORS(app)

    @app.route("/")
    def index() -> Response:
        """Serve the status dashboard."""
        return send_from_directory(STATIC_DIR, "index.html")

    @app.route("/api/status")
    def api_status() -> Response:
        """Report cache state and available endpoints."""
        status = get_coordinator().status()
        return jsonify({
            "status": "online",
            "message": "Deeper.id scraper API is running",
            "cache_status": "Active (In Memory)" if status.populated else "Empty",
            "last_update": to_iso(status.fetched_at),
            "total_items": status.total_items,
            "endpoints": ENDPOINTS,
        })

    @app.route("/api/dramas")
    async def api_dramas() -> Response | tuple[Response, int]:
        """Serve all dramas, refreshing the cache when it has expired."""
        try:
            result = await get_coordinator().get_records()
        except NoDataAvailable as e:
            current_app.logger.error("No drama data available: %s", e)
            return jsonify({"status": "error", "message": str(e)}), 500

        data = [record.to_api() for record in result.records]

        if result.source == "cache":
            return jsonify({
                "status": "success",
                "source": "cache",
                "cached_at": to_iso(result.fetched_at),
                "total": len(data),
                "data": data,
            })

        if result.source == "live":
            return jsonify({
                "status": "success",
                "source": "live_scraping",
                "total": len(data),
                "data": data,
            })

        current_app.logger.warning("Serving stale cache after failed refresh: %s", result.error)
        return jsonify({
            "status": "warning",
            "message": "Failed to refresh data, showing the last cached data.",
            "error_detail": str(result.error) if result.error else None,
            "source": "old_cache",
            "data": data,
        })

    @app.route("/api/search")
    async def api_search() -> Response | tuple[Response, int]:
        """Filter cached dramas by a case-insensitive title/summary match."""
        query = (request.args.get("q") or "").strip().lower()
        try:
            matches = await get_coordinator().search(query)
        except NoDataAvailable as e:
            current_app.logger.error("Search failed, no drama data available: %s", e)
            return jsonify({"status": "error", "message": str(e)}), 500

        return jsonify({
            "status": "success",
            "query": query,
            "total_found": len(matches),
            "data": [record.to_api() for record in matches],
        })

    @app.route("/api/clear-cache")
    def api_clear_cache() -> Response:
        """Drop all cached data."""
        get_coordinator().clear()
        return jsonify({"message": "Cache cleared."})

    return app


def run_server(host: str = "0.0.0.0", port: int = 3000, debug: bool = False) -> None:
    """Run the Flask development server."""
    app = create_app()
    print(f"\nDeeper.id scraper API running at http://localhost:{port}/\n")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    run_server()
