"""Integration test package.

These tests drive the CLI, the web API and the full render pipeline.
Tests that render SVG need the Graphviz ``neato`` executable and are
skipped when it is not on PATH.
"""
