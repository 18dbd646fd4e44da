"""Structured logging configuration using structlog.

Provides JSON logs in production and colored console output in development.
Every record is stamped with the service name, and SSN-shaped digit runs are
masked before rendering, whichever logger produced them.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from structlog.typing import EventDict, Processor

    from formation_docs.core.config import ObservabilityConfig

_SSN_PATTERN = re.compile(r"\b\d{3}-?\d{2}-?\d{4}\b")
SSN_MASK = "***-**-****"


def redact_identifiers(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask taxpayer identifiers in every string value of the record."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = _SSN_PATTERN.sub(SSN_MASK, value)
    return event_dict


def _add_service(name: str) -> Processor:
    def add_service(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", name)
        return event_dict

    return add_service


def setup_logging(config: ObservabilityConfig) -> None:
    """Route stdlib logging through structlog's processor chain.

    Context bound with ``structlog.contextvars`` (e.g. the ``form`` being
    generated) is merged into every record.
    """
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        _add_service(config.service_name),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if sys.stderr.isatty():
        renderer: Processor = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Redaction runs last so it sees fully formatted messages from both paths.
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            redact_identifiers,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger("formation_docs").setLevel(level)
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
