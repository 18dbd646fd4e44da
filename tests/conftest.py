"""Shared fixtures for formation-docs tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import pytest

from formation_docs.core.config import AppSettings, FetchConfig
from formation_docs.engine import DocumentGenerationEngine
from formation_docs.templates.fetcher import TemplateFetcher
from tests.fakes.fake_template_source import FakeTemplateSource

FIXED_NOW = datetime(2026, 3, 2, 15, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings() -> AppSettings:
    """Default test settings (short fetch timeout, deterministic PDFs)."""
    return AppSettings(fetch=FetchConfig(timeout_seconds=2.0))


@pytest.fixture
def acme_intake() -> dict[str, str]:
    """Minimal California LLC intake."""
    return {"business_name": "Acme LLC", "entity_type": "LLC", "state": "CA"}


@pytest.fixture
def full_intake() -> dict[str, str]:
    """Intake using the upper-case keys of the web form."""
    return {
        "LEGAL_NAME": "Sunrise Bakery LLC",
        "TRADE_NAME": "Sunrise Bakes",
        "ENTITY_TYPE": "LLC",
        "STATE": "CA",
        "BUSINESS_ADDRESS": "100 Market St, San Francisco, CA 94105",
        "MAILING_ADDRESS": "PO Box 12, San Francisco, CA 94101",
        "RESPONSIBLE_PARTY_NAME": "Jordan Rivera",
        "RESPONSIBLE_PARTY_SSN": "123-45-6789",
        "SERVICE_OF_PROCESS": "Jordan Rivera",
        "DATE": "01/15/2026",
        "PURPOSE": "Retail bakery",
    }


@pytest.fixture
def make_engine(settings: AppSettings) -> Callable[[FakeTemplateSource], DocumentGenerationEngine]:
    """Build an engine whose template downloads are served by *source*."""

    def _make(source: FakeTemplateSource) -> DocumentGenerationEngine:
        fetcher = TemplateFetcher(settings.fetch, transport=source.transport)
        return DocumentGenerationEngine(settings, fetcher=fetcher, clock=lambda: FIXED_NOW)

    return _make
