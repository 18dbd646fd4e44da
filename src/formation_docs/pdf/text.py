"""Text helpers shared by the overlay renderer and the synthesizer."""

from __future__ import annotations

from reportlab.lib.utils import simpleSplit

# Helvetica lacks glyphs for many Unicode characters that arrive from web
# forms (smart quotes, non-breaking hyphens, narrow spaces, ...).
_UNICODE_REPLACEMENTS: dict[str, str] = {
    # Dashes / hyphens
    "\u2010": "-",       # hyphen
    "\u2011": "-",       # non-breaking hyphen
    "\u2012": "-",       # figure dash
    "\u2013": "-",       # en-dash
    "\u2014": "-",       # em-dash
    "\u2015": "-",       # horizontal bar
    # Spaces
    "\u00a0": " ",       # non-breaking space
    "\u2009": " ",       # thin space
    "\u200a": " ",       # hair space
    "\u202f": " ",       # narrow no-break space
    # Quotes
    "\u2018": "'",       # left single quote
    "\u2019": "'",       # right single quote
    "\u201c": '"',       # left double quote
    "\u201d": '"',       # right double quote
    # Misc punctuation
    "\u2026": "...",     # ellipsis
    "\u2022": "*",       # bullet
}


def sanitize_text(text: str) -> str:
    """Replace characters the standard PDF fonts cannot render; collapse newlines."""
    for char, replacement in _UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return " ".join(text.split())


def wrap_text(text: str, font: str, size: float, width: float) -> list[str]:
    """Split *text* into lines no wider than *width* points (at least one line)."""
    return simpleSplit(text, font, size, width) or [""]
