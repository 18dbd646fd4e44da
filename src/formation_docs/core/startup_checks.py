"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from formation_docs.core.config import AppSettings

log = logging.getLogger(__name__)


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_auth(settings)
    _check_fetch(settings)
    _check_layout(settings)


def _check_auth(settings: AppSettings) -> None:
    """Reject auth enabled with no admin key; every request would be rejected."""
    if settings.auth.enabled and not settings.auth.admin_key:
        raise ValueError(
            "FORMDOCS_AUTH_ENABLED=true but FORMDOCS_AUTH_ADMIN_KEY is empty. "
            "Set an admin key or disable auth."
        )


def _check_fetch(settings: AppSettings) -> None:
    """Warn when official templates will never be downloaded."""
    if not settings.fetch.enabled:
        log.warning(
            "FORMDOCS_FETCH_ENABLED=false: official templates will not be downloaded; "
            "every form will be synthesized."
        )


def _check_layout(settings: AppSettings) -> None:
    """Reject a value column left of the label column."""
    if settings.pdf.value_x <= settings.pdf.label_x:
        raise ValueError(
            f"FORMDOCS_PDF_VALUE_X ({settings.pdf.value_x}) must be greater than "
            f"FORMDOCS_PDF_LABEL_X ({settings.pdf.label_x})."
        )
