"""Examples showing how to draw PRISMA flowcharts from Python.

Needs the Graphviz executables (``neato``) on PATH.
"""

from pathlib import Path
import sys

# Add src to path for local development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from prismaflow import prisma_flowchart, read_prisma_data
from prismaflow.core.models import DiagramStyle, FlowData, PrismaData
from prismaflow.io.loader import template_path

OUTPUT = Path("output")


def example_1_template():
    """Load the bundled template and save all four variants."""
    print("\n=== Example 1: Template, all variants ===")

    data = read_prisma_data(template_path())
    for previous in (True, False):
        for other in (True, False):
            chart = prisma_flowchart(data, previous=previous, other=other)
            path = chart.save(OUTPUT / f"prisma_{chart.variant.variant.value}.svg")
            print(f"Saved {path}")


def example_2_interactive():
    """Hyperlinked boxes, written as a standalone HTML page."""
    print("\n=== Example 2: Interactive HTML ===")

    data = read_prisma_data(template_path())
    chart = prisma_flowchart(data, interactive=True)
    print(f"Saved {chart.save(OUTPUT / 'prisma_interactive.html')}")


def example_3_from_code():
    """Build the data in code, databases-only review, custom colours."""
    print("\n=== Example 3: Data from code ===")

    counts = {
        "database_results": 120, "register_results": 4,
        "duplicates": 20, "excluded_automatic": 0, "excluded_other": 2,
        "records_screened": 102, "records_excluded": 80,
        "dbr_sought_reports": 22, "dbr_notretrieved_reports": 1,
        "dbr_assessed": 21, "new_studies": 9, "new_reports": 11,
    }
    labels = {
        "newstud": "Identification of studies via databases and registers",
        "database_results": "Databases", "register_results": "Registers",
        "duplicates": "Duplicate records removed",
        "excluded_automatic": "Records marked as ineligible by automation tools",
        "excluded_other": "Records removed for other reasons",
        "records_screened": "Records screened", "records_excluded": "Records excluded",
        "dbr_sought_reports": "Reports sought for retrieval",
        "dbr_notretrieved_reports": "Reports not retrieved",
        "dbr_assessed": "Reports assessed for eligibility",
        "dbr_excluded": "Reports excluded:",
        "new_studies": "Studies included in review",
        "new_reports": "Reports of included studies",
    }
    flow = FlowData(
        counts=counts,
        labels=labels,
        dbr_excluded="Wrong population, 6; Wrong outcome, 4; No full text in English, 2",
    )
    style = DiagramStyle(title_colour="LightSkyBlue", arrow_colour="DimGray")
    chart = prisma_flowchart(PrismaData(flow=flow), previous=False, other=False, style=style)
    print(f"Saved {chart.save(OUTPUT / 'prisma_databases_only.png')}")


if __name__ == "__main__":
    example_1_template()
    example_2_interactive()
    example_3_from_code()
