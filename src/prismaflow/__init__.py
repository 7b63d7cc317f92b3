"""PRISMA 2020 flow diagrams for systematic reviews.

Counts and box texts are read from a CSV template, laid out on a fixed
grid with one of four topologies (with or without the "previous studies"
and "other methods" arms) and drawn with Graphviz.  The rendered SVG can
carry tooltips, rotated section labels and per-box hyperlinks, and can
be exported to PDF or PNG.
"""

__version__ = "0.1.0"

from .flowchart import Flowchart, build_description, prisma_flowchart
from .io.loader import read_prisma_data

__all__ = [
    "__version__",
    "Flowchart",
    "build_description",
    "prisma_flowchart",
    "read_prisma_data",
]
