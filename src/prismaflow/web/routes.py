"""API routes for the flowchart web app.

Every request carries the full template CSV and rendering options, so
the endpoints are stateless.  Data errors come back as 422 with the
specific message, rendering failures as 500.
"""

from __future__ import annotations

import io
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse, Response
from pydantic import BaseModel

from ..core.errors import (
    InvalidCountError,
    MalformedExclusionTableError,
    MissingDataError,
    RasterizationError,
    RenderError,
    TemplateFormatError,
)
from ..core.models import DiagramStyle, PrismaData, RenderConfig
from ..flowchart import Flowchart, build_description, prisma_flowchart
from ..io.loader import preview_table, read_prisma_data, template_path
from ..utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api")

DATA_ERRORS = (MissingDataError, MalformedExclusionTableError, InvalidCountError, TemplateFormatError)
RENDER_ERRORS = (RenderError, RasterizationError)

MEDIA_TYPES: Dict[str, str] = {
    "svg": "image/svg+xml",
    "html": "text/html; charset=utf-8",
    "dot": "text/vnd.graphviz",
    "pdf": "application/pdf",
    "png": "image/png",
}


class PreviewRequest(BaseModel):
    """Template CSV to preview."""

    csv: str


class FlowchartRequest(BaseModel):
    """Template CSV plus rendering options.  Unset style fields use settings."""

    csv: str
    previous: bool = True
    other: bool = True
    interactive: bool = False
    font: Optional[str] = None
    title_colour: Optional[str] = None
    greybox_colour: Optional[str] = None
    main_colour: Optional[str] = None
    arrow_colour: Optional[str] = None
    arrow_head: Optional[str] = None
    arrow_tail: Optional[str] = None

    def style(self) -> DiagramStyle:
        fields = self.model_dump(include=set(DiagramStyle.model_fields), exclude_none=True)
        return DiagramStyle(**fields)


def _load(req: FlowchartRequest) -> PrismaData:
    try:
        return read_prisma_data(io.StringIO(req.csv))
    except DATA_ERRORS as e:
        raise HTTPException(status_code=422, detail=str(e))


def _draw(req: FlowchartRequest) -> Flowchart:
    data = _load(req)
    try:
        return prisma_flowchart(
            data,
            previous=req.previous,
            other=req.other,
            interactive=req.interactive,
            style=req.style(),
        )
    except DATA_ERRORS as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RENDER_ERRORS as e:
        logger.error(f"Flowchart rendering failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


def _attachment(content, fmt: str) -> Response:
    return Response(
        content=content,
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="prisma.{fmt}"'},
    )


@router.get("/template")
def download_template() -> FileResponse:
    """Download the blank PRISMA template CSV."""
    return FileResponse(template_path(), media_type="text/csv", filename="PRISMA.csv")


@router.post("/preview")
def preview(req: PreviewRequest) -> List[Dict[str, str]]:
    """Return the box, text, tooltip, URL and count columns as rows."""
    try:
        frame = preview_table(io.StringIO(req.csv))
    except TemplateFormatError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return frame.to_dict(orient="records")


@router.post("/flowchart")
def flowchart_svg(req: FlowchartRequest) -> Response:
    """Render the flowchart as SVG."""
    chart = _draw(req)
    return Response(content=chart.svg, media_type=MEDIA_TYPES["svg"])


@router.post("/flowchart/{fmt}")
def flowchart_export(fmt: str, req: FlowchartRequest) -> Response:
    """Render the flowchart as ``svg``, ``html``, ``dot``, ``pdf`` or ``png``."""
    fmt = fmt.lower()
    if fmt not in MEDIA_TYPES:
        raise HTTPException(status_code=400, detail=f"Unsupported format: {fmt}")
    if fmt == "dot":
        data = _load(req)
        config = RenderConfig(previous=req.previous, other=req.other, style=req.style())
        try:
            content = build_description(data, config).source
        except DATA_ERRORS as e:
            raise HTTPException(status_code=422, detail=str(e))
        return _attachment(content, fmt)

    chart = _draw(req)
    if fmt == "svg":
        content = chart.svg
    elif fmt == "html":
        content = chart.to_html()
    else:
        from ..io.export import svg_to_pdf, svg_to_png

        try:
            content = svg_to_pdf(chart.svg) if fmt == "pdf" else svg_to_png(chart.svg)
        except RasterizationError as e:
            logger.error(f"Flowchart export failed: {e}")
            raise HTTPException(status_code=500, detail=str(e))
    return _attachment(content, fmt)
