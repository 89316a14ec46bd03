"""
HTTP Server

Serves a built deck:
- GET /            the rendered page
- GET /style.css   the theme stylesheet
- /assets/...      files next to the source document
"""

from pathlib import Path
from typing import Optional, Union

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, Response
from fastapi.staticfiles import StaticFiles
from loguru import logger

from .assets import ASSET_MOUNT
from .config import Theme
from .content import Deck
from .page import render_page


def create_app(
    deck: Deck,
    theme: Theme,
    asset_dir: Optional[Union[str, Path]] = None,
) -> FastAPI:
    """Build the FastAPI app for one deck.

    The deck is immutable, so every request reads it without locking. The
    page is rendered per request so a dated watermark stays current.
    """
    app = FastAPI(title="slides-md", docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        return HTMLResponse(content=render_page(deck, theme))

    @app.get("/style.css")
    async def stylesheet() -> Response:
        return Response(content=theme.css, media_type="text/css")

    if asset_dir is not None:
        asset_dir = Path(asset_dir)
        if asset_dir.is_dir():
            app.mount(ASSET_MOUNT.rstrip("/"), StaticFiles(directory=str(asset_dir)), name="assets")
        else:
            logger.warning("Asset directory {} does not exist; /assets/ is not served", asset_dir)

    return app


def serve(
    deck: Deck,
    theme: Theme,
    asset_dir: Optional[Union[str, Path]] = None,
    host: str = "0.0.0.0",
    port: int = 8080,
) -> None:
    """Run the deck server until interrupted."""
    import uvicorn

    app = create_app(deck, theme, asset_dir)
    uvicorn.run(app, host=host, port=port, log_config=None)
