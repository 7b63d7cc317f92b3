"""High-level entry points for drawing PRISMA 2020 flowcharts.

Typical use::

    data = read_prisma_data("PRISMA.csv")
    chart = prisma_flowchart(data, previous=False, interactive=True)
    chart.save("prisma.svg")

The pipeline is select variant, assemble, emit DOT, render with Graphviz,
then post-process the SVG.  Everything before rendering is pure.
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from pathlib import Path
from typing import Optional, Union

from .core.models import DiagramStyle, PrismaData, RenderConfig
from .layout.assembler import assemble
from .layout.emitter import DiagramDescription, emit
from .layout.variant import VariantParams, select_variant
from .overlay.labels import add_section_labels
from .overlay.links import add_hyperlinks
from .render.engine import render_svg
from .utils.logging import get_logger

logger = get_logger(__name__)

HTML_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
{svg}
</body>
</html>
"""

SAVE_FORMATS = (".svg", ".dot", ".gv", ".html", ".pdf", ".png")


@dataclass(frozen=True)
class Flowchart:
    """A rendered flowchart and the description it was drawn from."""

    description: DiagramDescription
    svg: str
    interactive: bool = False

    @property
    def variant(self) -> VariantParams:
        return self.description.variant

    @property
    def source(self) -> str:
        return self.description.source

    def to_html(self, title: str = "PRISMA flow diagram") -> str:
        return HTML_PAGE.format(title=escape(title), svg=self.svg)

    def save(self, path: Union[str, Path]) -> Path:
        """Write the chart, picking the format from the file suffix.

        ``.svg`` and ``.html`` keep tooltips and links; ``.dot``/``.gv``
        write the Graphviz source; ``.pdf`` and ``.png`` are rasterised.
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix not in SAVE_FORMATS:
            raise ValueError(
                f"Unsupported output format '{suffix}', expected one of {', '.join(SAVE_FORMATS)}"
            )
        path.parent.mkdir(parents=True, exist_ok=True)
        if suffix in (".pdf", ".png"):
            from .io.export import prisma_pdf, prisma_png

            if suffix == ".pdf":
                return prisma_pdf(self.svg, path)
            return prisma_png(self.svg, path)
        if suffix in (".dot", ".gv"):
            content = self.source
        elif suffix == ".html":
            content = self.to_html()
        else:
            content = self.svg
        path.write_text(content, encoding="utf-8")
        logger.info(f"Saved {suffix[1:].upper()} flowchart to {path}")
        return path


def build_description(data: PrismaData, config: Optional[RenderConfig] = None) -> DiagramDescription:
    """Select the variant, assemble and emit DOT source.  No rendering.

    Raises:
        MissingDataError: A metric needed by the chosen variant is absent.
    """
    config = config or RenderConfig()
    variant = select_variant(config.previous, config.other)
    assembly = assemble(data.flow, data.tooltips, variant, config.style)
    return emit(assembly, variant)


def prisma_flowchart(
    data: PrismaData,
    previous: bool = True,
    other: bool = True,
    interactive: bool = False,
    style: Optional[DiagramStyle] = None,
) -> Flowchart:
    """Draw a PRISMA 2020 flowchart.

    Args:
        data: Counts, texts, tooltips and URLs, e.g. from ``read_prisma_data``.
        previous: Include the "previous studies" arm.
        other: Include the "other methods" arm.
        interactive: Wrap each box that has a URL in a hyperlink.
        style: Font, colours and arrow shapes.

    Raises:
        MissingDataError: Before anything is rendered.
        RenderError: Graphviz is missing or failed.
    """
    style = style or DiagramStyle()
    config = RenderConfig(previous=previous, other=other, style=style)
    description = build_description(data, config)
    variant = description.variant
    logger.info(f"Rendering PRISMA flowchart variant {variant.variant.value}")

    svg = render_svg(description)
    svg = add_section_labels(svg, variant, font=style.font)
    if interactive:
        svg = add_hyperlinks(svg, variant, data.urls)
    return Flowchart(description=description, svg=svg, interactive=interactive)
