"""Web package for the PRISMA flowchart tool.

This package contains the FastAPI application: an upload page and a
stateless JSON API that renders flowcharts from template CSV text.

To start the web server from the CLI use:
    prismaflow serve --port 8000
"""
