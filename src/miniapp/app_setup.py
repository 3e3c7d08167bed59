"""
Application setup utilities.

Serves the built client in production, with an SPA fallback to index.html.
"""

from pathlib import Path

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import FileResponse

from miniapp.api import API_PREFIX
from miniapp.config import Settings
from miniapp.core.logging import logger

# Every method is routed here so unmatched non-GET requests get a 404, not a 405
FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def add_client_routes(app: FastAPI, settings: Settings) -> None:
    """
    Serve the built client from the configured dist directory.

    Must be called after the API routers are registered: the catch-all route
    only answers GET requests that no other route matched, and never answers
    paths under /api so unknown API routes keep their JSON 404.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    client_dist = settings.get_client_dist_path()
    index_file = client_dist / "index.html"
    api_root = API_PREFIX.strip("/")

    logger.info(f"Serving client files from {client_dist}")

    @app.api_route(
        "/{full_path:path}", methods=FALLBACK_METHODS, include_in_schema=False
    )
    async def serve_client(request: Request, full_path: str) -> FileResponse:
        """Static file or SPA fallback."""
        if request.method not in ("GET", "HEAD"):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

        if full_path == api_root or full_path.startswith(f"{api_root}/"):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

        candidate = _resolve_static_file(client_dist, full_path)
        if candidate is not None:
            return FileResponse(candidate)

        if not index_file.is_file():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

        return FileResponse(index_file)


def _resolve_static_file(root: Path, relative_path: str) -> Path | None:
    """Return the file under root for relative_path, or None outside root."""
    if not relative_path:
        return None

    candidate = (root / relative_path).resolve()
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None

    return candidate
