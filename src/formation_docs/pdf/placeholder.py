"""Plain-text stand-in for a form whose PDF could not be rendered."""

from __future__ import annotations

from datetime import datetime
from pathlib import PurePosixPath
from typing import Sequence


def placeholder_filename(filename: str) -> str:
    """``Articles_of_Organization.pdf`` -> ``Articles_of_Organization.txt``."""
    return str(PurePosixPath(filename).with_suffix(".txt"))


def render_placeholder(
    title: str,
    rows: Sequence[tuple[str, str]],
    generated_at: datetime,
    disclaimer: str,
) -> bytes:
    """Summarize the same labeled rows the synthesizer would print, as UTF-8 text."""
    lines = [title, "=" * len(title), ""]
    width = max((len(label) for label, value in rows if value), default=0)
    lines.extend(f"{label.ljust(width)}  {value}" for label, value in rows if value)
    lines.extend([
        "",
        "A formatted PDF could not be produced for this form.",
        f"Generated on {generated_at.isoformat()}",
        disclaimer,
        "",
    ])
    return "\n".join(lines).encode("utf-8")
