"""Process-wide hooks: logging."""

from __future__ import annotations

from formation_docs.hooks.logging_config import setup_logging

__all__ = ["setup_logging"]
