"""Set values on a template's interactive (AcroForm) text fields."""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Mapping

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from formation_docs.exceptions import TemplateUnavailable

log = logging.getLogger(__name__)

_TEXT_FIELD = "/Tx"


def load_template(content: bytes, url: str = "") -> PdfWriter:
    """Parse downloaded template bytes into an editable writer.

    Raises:
        TemplateUnavailable: If the bytes cannot be parsed or decrypted.
    """
    try:
        reader = PdfReader(BytesIO(content))
        if reader.is_encrypted:
            reader.decrypt("")
        if not reader.pages:
            raise TemplateUnavailable(url, "template has no pages")
        return PdfWriter(clone_from=reader)
    except TemplateUnavailable:
        raise
    except (PyPdfError, ValueError, KeyError, NotImplementedError) as exc:
        raise TemplateUnavailable(url, f"unreadable PDF: {exc}") from exc


def text_field_names(writer: PdfWriter) -> dict[str, str]:
    """Map every text field's full and partial name to its full name."""
    names: dict[str, str] = {}
    for full_name, field in (writer.get_fields() or {}).items():
        if field.get("/FT") != _TEXT_FIELD:
            continue
        names[full_name] = full_name
        partial = field.get("/T")
        if partial:
            names.setdefault(str(partial), full_name)
    return names


def populate_fields(writer: PdfWriter, values: Mapping[str, str]) -> int:
    """Fill same-named text fields and return how many were actually set.

    Entries with empty values or no matching field are skipped; a missing
    field never aborts the operation.
    """
    available = text_field_names(writer)
    updates: dict[str, str] = {}
    for name, value in values.items():
        if not value:
            continue
        target = available.get(name)
        if target is None:
            log.debug("Template has no text field %r, skipping", name)
            continue
        updates[name] = value

    if not updates:
        return 0

    for page in writer.pages:
        if "/Annots" in page:
            writer.update_page_form_field_values(page, updates, auto_regenerate=False)
    writer.set_need_appearances_writer(True)

    log.info("Populated %d of %d mapped fields", len(updates), len(values))
    return len(updates)
