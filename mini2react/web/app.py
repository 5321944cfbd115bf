"""FastAPI application factory."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI

from mini2react import __version__
from mini2react.web.api import router


def create_app(allowed_roots: list[Path] | None = None) -> FastAPI:
    """Build the API app; paths outside ``allowed_roots`` (home by default) are refused."""
    app = FastAPI(title="mini2react", version=__version__)
    app.state.allowed_roots = [
        Path(root).expanduser().resolve() for root in (allowed_roots or [Path.home()])
    ]
    app.include_router(router)
    return app
