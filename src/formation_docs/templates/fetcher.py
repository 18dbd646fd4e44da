"""Download official PDF templates.

Unavailability (non-2xx, network error, timeout, non-PDF body) is a reported
outcome, never an exception: the engine routes it to synthesis.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from formation_docs.core.config import FetchConfig

log = logging.getLogger(__name__)

_PDF_MARKER = b"%PDF"
_MARKER_WINDOW = 1024


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one template download."""

    url: str
    content: bytes | None = None
    status_code: int | None = None
    reason: str = ""

    @property
    def available(self) -> bool:
        return self.content is not None


class TemplateFetcher:
    """Thin wrapper around ``httpx.AsyncClient`` with a bounded timeout and no retries.

    A custom ``transport`` (e.g. ``httpx.MockTransport``) can be injected for tests.
    """

    def __init__(
        self,
        config: FetchConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or FetchConfig()
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    async def fetch(self, url: str) -> FetchResult:
        """GET *url* and return its bytes, or an unavailable result with a reason."""
        if not self._config.enabled:
            return FetchResult(url=url, reason="fetching disabled")

        timeout = httpx.Timeout(self._config.timeout_seconds)
        headers = {
            "User-Agent": self._config.user_agent,
            "Accept": "application/pdf,*/*;q=0.8",
        }
        try:
            async with httpx.AsyncClient(
                timeout=timeout,
                headers=headers,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException:
            log.warning("Template fetch timed out after %.1fs: %s", self._config.timeout_seconds, url)
            return FetchResult(url=url, reason="timeout")
        except httpx.HTTPError as exc:
            log.warning("Template fetch failed for %s: %s", url, exc)
            return FetchResult(url=url, reason=f"network error: {type(exc).__name__}")

        if not response.is_success:
            log.warning("Template fetch returned HTTP %d: %s", response.status_code, url)
            return FetchResult(url=url, status_code=response.status_code, reason=f"HTTP {response.status_code}")

        content = response.content
        if _PDF_MARKER not in content[:_MARKER_WINDOW]:
            log.warning("Template at %s is not a PDF (%d bytes)", url, len(content))
            return FetchResult(url=url, status_code=response.status_code, reason="not a PDF")

        log.info("Downloaded template %s (%d bytes)", url, len(content))
        return FetchResult(url=url, content=content, status_code=response.status_code)
