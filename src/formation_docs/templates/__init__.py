"""Official template download."""

from __future__ import annotations

from formation_docs.templates.fetcher import FetchResult, TemplateFetcher

__all__ = ["FetchResult", "TemplateFetcher"]
