"""Tests for TemplateFetcher using an in-process transport."""

from __future__ import annotations

import httpx
import pytest

from formation_docs.core.config import FetchConfig
from formation_docs.templates.fetcher import TemplateFetcher
from tests.fakes.fake_template_source import FakeTemplateSource, flat_template

URL = "https://forms.example.gov/form.pdf"


def _fetcher(source: FakeTemplateSource, **overrides: object) -> TemplateFetcher:
    return TemplateFetcher(FetchConfig(**overrides), transport=source.transport)


class TestTemplateFetcher:
    @pytest.mark.asyncio
    async def test_pdf_is_returned(self) -> None:
        pdf = flat_template()
        result = await _fetcher(FakeTemplateSource({URL: pdf})).fetch(URL)
        assert result.available
        assert result.content == pdf
        assert result.status_code == 200

    @pytest.mark.asyncio
    async def test_browser_user_agent_sent(self) -> None:
        source = FakeTemplateSource({URL: flat_template()})
        await _fetcher(source).fetch(URL)
        assert len(source.requests) == 1
        assert source.requests[0].headers["User-Agent"].startswith("Mozilla/5.0")

    @pytest.mark.asyncio
    async def test_custom_user_agent(self) -> None:
        source = FakeTemplateSource({URL: flat_template()})
        await _fetcher(source, user_agent="formation-docs-test").fetch(URL)
        assert source.requests[0].headers["User-Agent"] == "formation-docs-test"

    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        result = await _fetcher(FakeTemplateSource()).fetch(URL)
        assert not result.available
        assert result.status_code == 404
        assert result.reason == "HTTP 404"

    @pytest.mark.asyncio
    async def test_server_error(self) -> None:
        result = await _fetcher(FakeTemplateSource({URL: 503})).fetch(URL)
        assert not result.available
        assert result.reason == "HTTP 503"

    @pytest.mark.asyncio
    async def test_non_pdf_body(self) -> None:
        result = await _fetcher(FakeTemplateSource({URL: b"<html>Access denied</html>"})).fetch(URL)
        assert not result.available
        assert result.reason == "not a PDF"

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        source = FakeTemplateSource({URL: httpx.ConnectTimeout("timed out")})
        result = await _fetcher(source).fetch(URL)
        assert not result.available
        assert result.reason == "timeout"

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        source = FakeTemplateSource({URL: httpx.ConnectError("connection refused")})
        result = await _fetcher(source).fetch(URL)
        assert not result.available
        assert result.reason == "network error: ConnectError"

    @pytest.mark.asyncio
    async def test_disabled_makes_no_request(self) -> None:
        source = FakeTemplateSource({URL: flat_template()})
        fetcher = _fetcher(source, enabled=False)
        result = await fetcher.fetch(URL)
        assert not fetcher.enabled
        assert not result.available
        assert result.reason == "fetching disabled"
        assert source.requests == []
