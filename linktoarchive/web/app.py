"""FastAPI application for the linktoarchive service."""

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .. import __version__
from ..config import load_settings
from ..hooks import ArchiveLinkHooks
from .routes import links, pages

STATIC_DIR = Path(__file__).parent / "static"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="LinkToArchive",
        description="Archive links for external links on wiki pages",
        version=__version__,
    )

    # Mount static files (browser script, stylesheet, icons)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    app.state.settings = load_settings()
    app.state.hooks = ArchiveLinkHooks(app.state.settings)

    app.include_router(links.router, prefix="/api")
    app.include_router(pages.router, prefix="/api")

    return app
