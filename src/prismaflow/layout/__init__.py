"""Diagram layout: the fixed template, variant selection, assembly and DOT emission."""

from .assembler import Assembly, assemble
from .emitter import DiagramDescription, emit
from .variant import Variant, VariantParams, select_variant

__all__ = [
    "Assembly",
    "DiagramDescription",
    "Variant",
    "VariantParams",
    "assemble",
    "emit",
    "select_variant",
]
