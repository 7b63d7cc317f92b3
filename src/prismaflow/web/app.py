"""FastAPI web application for drawing PRISMA flowcharts.

This module defines the FastAPI application, configures Jinja2 templates
for the upload page and includes the API routes.  It also provides a
convenience function to launch the server via Uvicorn.
"""

from __future__ import annotations

from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from .. import __version__
from .routes import router

app = FastAPI(
    title="PRISMA Flow Diagram",
    description="PRISMA 2020 flowcharts from a CSV template",
    version=__version__,
)

BASE_DIR = Path(__file__).parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

app.include_router(router)


@app.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    """Upload page: template CSV in, flowchart out."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"title": "PRISMA Flow Diagram"},
    )


def start_server(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    """Start the Uvicorn web server.

    Parameters
    ----------
    host: str
        Host to bind the server to.
    port: int
        Port to listen on. Defaults to 8000.
    reload: bool
        Whether to enable auto-reload. Useful during development.
    """
    uvicorn.run(
        "prismaflow.web.app:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    start_server()
