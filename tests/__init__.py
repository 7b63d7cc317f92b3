"""Test suite for prismaflow.

Unit tests cover data loading, variant selection, assembly, DOT emission
and the SVG overlays without needing Graphviz.  To run the tests, execute
`pytest` from the project root.
"""
