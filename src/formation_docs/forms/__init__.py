"""Static form configuration and selection rules."""

from __future__ import annotations

from formation_docs.forms.registry import (
    ALL_SPECS,
    EntityKind,
    FormSpec,
    OverlayText,
    Row,
    articles_spec,
    normalize_entity_type,
    normalize_state,
    select_forms,
)

__all__ = [
    "ALL_SPECS",
    "EntityKind",
    "FormSpec",
    "OverlayText",
    "Row",
    "articles_spec",
    "normalize_entity_type",
    "normalize_state",
    "select_forms",
]
