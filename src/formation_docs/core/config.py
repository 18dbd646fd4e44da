"""Nested pydantic-settings configuration for the application.

Each group reads its own ``FORMDOCS_<GROUP>_*`` env vars::

    export FORMDOCS_FETCH_TIMEOUT_SECONDS=5
    export FORMDOCS_PDF_PAGE_SIZE=a4
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

_BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


class FetchConfig(BaseSettings):
    """Template download configuration.

    Env vars use ``FORMDOCS_FETCH_`` prefix.  Some government hosts reject
    requests without a browser-like ``User-Agent``.
    """

    model_config = {"env_prefix": "FORMDOCS_FETCH_"}

    enabled: bool = True
    timeout_seconds: float = Field(default=15.0, gt=0.0, le=300.0)
    user_agent: str = _BROWSER_USER_AGENT


class PDFConfig(BaseSettings):
    """Layout of synthesized documents.

    Env vars use ``FORMDOCS_PDF_`` prefix.  All coordinates are PDF points
    measured from the bottom-left corner of the page.
    """

    model_config = {"env_prefix": "FORMDOCS_PDF_"}

    page_size: Literal["letter", "a4"] = "letter"
    font: str = "Helvetica"
    bold_font: str = "Helvetica-Bold"
    title_font_size: int = Field(default=16, ge=6, le=72)
    body_font_size: int = Field(default=11, ge=6, le=72)
    footer_font_size: int = Field(default=9, ge=6, le=72)
    top_margin: float = Field(default=42.0, ge=0.0)
    bottom_margin: float = Field(default=50.0, ge=0.0)
    label_x: float = 50.0
    value_x: float = 200.0
    right_margin: float = 50.0
    title_gap: float = 40.0
    line_height: float = Field(default=25.0, gt=0.0)
    footer_offset: float = 40.0
    disclaimer: str = (
        "This document contains the information you provided and should be "
        "submitted to the appropriate government agency."
    )
    deterministic: bool = True


class AuthConfig(BaseSettings):
    """Shared-secret bearer authentication.

    Env vars use ``FORMDOCS_AUTH_`` prefix::

        export FORMDOCS_AUTH_ADMIN_KEY=change-me

    Enabled by default; startup fails until a key is set.  Local runs can
    opt out with ``FORMDOCS_AUTH_ENABLED=false``.
    """

    model_config = {"env_prefix": "FORMDOCS_AUTH_"}

    enabled: bool = True
    admin_key: str = ""


class APIConfig(BaseSettings):
    """HTTP server configuration.

    Env vars use ``FORMDOCS_API_`` prefix.
    """

    model_config = {"env_prefix": "FORMDOCS_API_"}

    title: str = "formation-docs"
    description: str = "Generates EIN applications and Articles of Organization/Incorporation."
    host: str = "0.0.0.0"
    port: int = 10000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``FORMDOCS_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "FORMDOCS_OBSERVABILITY_"}

    service_name: str = "formation-docs"
    log_level: str = "INFO"


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    fetch: FetchConfig = FetchConfig()
    pdf: PDFConfig = PDFConfig()
    auth: AuthConfig = AuthConfig()
    api: APIConfig = APIConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
