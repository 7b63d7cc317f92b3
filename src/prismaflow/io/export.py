"""PDF and PNG export of rendered flowcharts via CairoSVG.

Rasterisation runs in a worker thread bounded by the rasterize timeout
and always produces bytes.  Files are written by the caller only after
the worker succeeded, so a failed or timed-out export leaves nothing on
disk.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from pathlib import Path
from typing import Callable, Optional, Union

import cairosvg

from ..config.settings import settings
from ..core.errors import RasterizationError
from ..utils.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


def _run_bounded(task: Callable[[], bytes], fmt: str, filename: Optional[str]) -> bytes:
    """Run a CairoSVG call in a worker thread bounded by the rasterize timeout."""
    timeout = settings.rasterize_timeout
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="rasterize")
    try:
        future = executor.submit(task)
        return future.result(timeout=timeout)
    except FutureTimeout:
        raise RasterizationError(
            f"{fmt.upper()} export timed out after {timeout:g}s", filename=filename
        ) from None
    except Exception as e:
        raise RasterizationError(f"{fmt.upper()} export failed: {e}", filename=filename) from e
    finally:
        executor.shutdown(wait=False)


def _pdf_bytes(svg: str, filename: Optional[str]) -> bytes:
    return _run_bounded(lambda: cairosvg.svg2pdf(bytestring=svg.encode("utf-8")), "pdf", filename)


def _png_bytes(svg: str, scale: Optional[float], filename: Optional[str]) -> bytes:
    scale = scale or settings.png_scale
    return _run_bounded(
        lambda: cairosvg.svg2png(
            bytestring=svg.encode("utf-8"), scale=scale, background_color="white"
        ),
        "png",
        filename,
    )


def svg_to_pdf(svg: str) -> bytes:
    """Rasterise SVG text to PDF bytes."""
    return _pdf_bytes(svg, None)


def svg_to_png(svg: str, scale: Optional[float] = None) -> bytes:
    """Rasterise SVG text to PNG bytes at ``scale`` (default from settings)."""
    return _png_bytes(svg, scale, None)


def prisma_pdf(svg: str, filename: PathLike) -> Path:
    """Write a flowchart to ``filename`` as PDF.

    Raises:
        RasterizationError: CairoSVG failed or exceeded the timeout.
    """
    path = Path(filename)
    path.write_bytes(_pdf_bytes(svg, str(path)))
    logger.info(f"Saved PDF flowchart to {path}")
    return path


def prisma_png(svg: str, filename: PathLike, scale: Optional[float] = None) -> Path:
    """Write a flowchart to ``filename`` as PNG.

    Raises:
        RasterizationError: CairoSVG failed or exceeded the timeout.
    """
    path = Path(filename)
    path.write_bytes(_png_bytes(svg, scale, str(path)))
    logger.info(f"Saved PNG flowchart to {path}")
    return path
