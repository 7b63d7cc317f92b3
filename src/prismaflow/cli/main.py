"""CLI application using Typer for drawing PRISMA 2020 flowcharts."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config.settings import settings
from ..core.errors import PrismaError
from ..core.models import DiagramStyle, RenderConfig
from ..flowchart import SAVE_FORMATS, build_description, prisma_flowchart
from ..io.loader import preview_table, read_prisma_data, write_template
from ..utils.logging import get_logger

app = typer.Typer(
    name="prismaflow",
    help="PRISMA 2020 flow diagrams from a CSV template",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


@app.command()
def render(
    csv_file: Path = typer.Argument(..., help="Filled-in PRISMA template CSV", exists=True, dir_okay=False),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file; format from suffix (svg, dot, gv, html, pdf, png). Default: <output_dir>/prisma.svg",
    ),
    previous: bool = typer.Option(True, "--previous/--no-previous", help="Include the previous studies arm"),
    other: bool = typer.Option(True, "--other/--no-other", help="Include the other methods arm"),
    interactive: bool = typer.Option(False, "--interactive", help="Add hyperlinks from the url column"),
    font: str = typer.Option(settings.font, "--font", help="Font family for box text"),
    title_colour: str = typer.Option(settings.title_colour, "--title-colour", help="Fill of the main title box"),
    greybox_colour: str = typer.Option(settings.greybox_colour, "--greybox-colour", help="Fill of grey boxes"),
    main_colour: str = typer.Option(settings.main_colour, "--main-colour", help="Outline of main boxes"),
    arrow_colour: str = typer.Option(settings.arrow_colour, "--arrow-colour", help="Arrow colour"),
    arrow_head: str = typer.Option(settings.arrow_head, "--arrow-head", help="Graphviz arrowhead shape"),
    arrow_tail: str = typer.Option(settings.arrow_tail, "--arrow-tail", help="Graphviz arrowtail shape"),
) -> None:
    """
    Render a flowchart from a PRISMA template CSV.

    Examples:
        prismaflow render PRISMA.csv -o prisma.png
        prismaflow render PRISMA.csv --no-previous --interactive -o prisma.html
    """
    if output is None:
        output = settings.output_dir / "prisma.svg"
    if output.suffix.lower() not in SAVE_FORMATS:
        console.print(f"[red]Error: unsupported output format '{output.suffix}'[/red]")
        raise typer.Exit(1)
    style = DiagramStyle(
        font=font,
        title_colour=title_colour,
        greybox_colour=greybox_colour,
        main_colour=main_colour,
        arrow_colour=arrow_colour,
        arrow_head=arrow_head,
        arrow_tail=arrow_tail,
    )
    try:
        data = read_prisma_data(csv_file)
        if output.suffix.lower() in (".dot", ".gv"):
            # DOT output needs no Graphviz executable
            config = RenderConfig(previous=previous, other=other, style=style)
            description = build_description(data, config)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(description.source, encoding="utf-8")
            variant = description.variant
        else:
            chart = prisma_flowchart(
                data, previous=previous, other=other, interactive=interactive, style=style
            )
            chart.save(output)
            variant = chart.variant
    except PrismaError as e:
        logger.error(f"Render failed: {e}")
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(
        f"[green]✓ PRISMA flowchart ({variant.variant.value}) saved to {output}[/green]"
    )


@app.command()
def template(
    output: Path = typer.Option(Path("PRISMA.csv"), "--output", "-o", help="Where to write the template"),
) -> None:
    """Write the bundled PRISMA template CSV."""
    path = write_template(output)
    console.print(f"[green]✓ Template written to {path}[/green]")


@app.command()
def preview(
    csv_file: Path = typer.Argument(..., help="PRISMA template CSV", exists=True, dir_okay=False),
) -> None:
    """Show the box, text, tooltip, URL and count columns of a template."""
    try:
        frame = preview_table(csv_file)
    except PrismaError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    table = Table(title=f"PRISMA data: {csv_file.name}")
    for column in frame.columns:
        table.add_column(column, style="cyan" if column == "box" else None)
    for row in frame.itertuples(index=False):
        table.add_row(*[str(v) for v in row])
    console.print(table)


@app.command()
def serve(
    host: str = typer.Option(
        "127.0.0.1",
        "--host",
        help="Hostname to bind the web server to.",
    ),
    port: int = typer.Option(
        8000,
        "--port",
        help="Port for the web server.",
    ),
    reload: bool = typer.Option(
        False,
        "--reload/--no-reload",
        help="Enable auto-reload (development only).",
    ),
) -> None:
    """Start the flowchart web app.

    Launches a FastAPI server with an upload page and the JSON API. Use
    ``--reload`` in development to auto-restart on code changes.
    """
    from ..web.app import start_server

    console.print(f"[bold blue]Starting web server[/bold blue] at http://{host}:{port}")
    start_server(host=host, port=port, reload=reload)


@app.command()
def version() -> None:
    """Show version information."""
    from .. import __version__
    console.print(f"prismaflow v{__version__}")


if __name__ == "__main__":
    app()
