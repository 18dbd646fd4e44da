"""PDF rendering tiers: field population, overlay, synthesis, text placeholder."""

from __future__ import annotations

from formation_docs.pdf.overlay import render_overlay
from formation_docs.pdf.placeholder import placeholder_filename, render_placeholder
from formation_docs.pdf.populator import load_template, populate_fields, text_field_names
from formation_docs.pdf.synthesizer import DocumentSynthesizer, PlacedRow

__all__ = [
    "DocumentSynthesizer",
    "PlacedRow",
    "load_template",
    "placeholder_filename",
    "populate_fields",
    "render_overlay",
    "render_placeholder",
    "text_field_names",
]
