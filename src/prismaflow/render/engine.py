"""Adapter over the Graphviz executables.

Layout and drawing are delegated entirely to Graphviz.  The adapter only
pipes DOT source through the configured engine and normalises failures
into ``RenderError``.
"""

from __future__ import annotations

import subprocess
from typing import Optional

import graphviz

from ..config.settings import settings
from ..core.errors import RenderError
from ..layout.emitter import DiagramDescription
from ..utils.logging import get_logger

logger = get_logger(__name__)


def render(description: DiagramDescription, fmt: str = "svg", engine: Optional[str] = None) -> bytes:
    """Render DOT source to ``fmt`` and return the raw bytes."""
    engine = engine or settings.layout_engine
    source = graphviz.Source(description.source, engine=engine)
    try:
        data = source.pipe(format=fmt)
    except graphviz.ExecutableNotFound as e:
        raise RenderError(
            f"Graphviz '{engine}' executable not found; install Graphviz from https://graphviz.org/download/"
        ) from e
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode("utf-8", "replace") if isinstance(e.stderr, bytes) else e.stderr
        raise RenderError(f"Graphviz '{engine}' failed: {stderr or e}") from e
    logger.debug(f"Rendered variant {description.variant.variant.value} with {engine} to {fmt}")
    return data


def render_svg(description: DiagramDescription, engine: Optional[str] = None) -> str:
    """Render DOT source to SVG text."""
    return render(description, "svg", engine).decode("utf-8")
