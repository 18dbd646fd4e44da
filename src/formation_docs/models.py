"""Pydantic data models for formation-docs.

``BusinessIntake`` is the request payload; ``GeneratedDocument`` and
``GenerationResult`` form the response envelope returned to callers.
"""

from __future__ import annotations

import base64
import logging
from datetime import date
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator

log = logging.getLogger(__name__)

DEFAULT_REASON = "Started new business"

REQUIRED_FIELDS = frozenset({"business_name", "entity_type"})

PDF_MIME = "application/pdf"
TEXT_MIME = "text/plain"


class FormType(str, Enum):
    """Document identifiers used as keys of ``GenerationResult.documents``."""

    SS4 = "ss4"
    ARTICLES = "articles"


# ── Intake ───────────────────────────────────────────────────────────


def _alias(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class BusinessIntake(BaseModel):
    """Structured business-formation data submitted by the caller.

    Both snake_case names and the upper-case keys used by the intake form
    (``LEGAL_NAME``, ``ENTITY_TYPE``, ...) are accepted.  Blank strings are
    treated as absent.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    business_name: str = Field(
        validation_alias=_alias("business_name", "legal_name", "LEGAL_NAME", "LLC_NAME", "BUSINESS_NAME"),
    )
    entity_type: str = Field(validation_alias=_alias("entity_type", "ENTITY_TYPE"))
    trade_name: Optional[str] = Field(default=None, validation_alias=_alias("trade_name", "TRADE_NAME", "DBA"))
    state: Optional[str] = Field(
        default=None, validation_alias=_alias("state", "formation_state", "STATE")
    )
    business_address: Optional[str] = Field(
        default=None, validation_alias=_alias("business_address", "BUSINESS_ADDRESS")
    )
    mailing_address: Optional[str] = Field(
        default=None, validation_alias=_alias("mailing_address", "MAILING_ADDRESS")
    )
    county: Optional[str] = Field(default=None, validation_alias=_alias("county", "COUNTY"))
    registered_agent: Optional[str] = Field(
        default=None,
        validation_alias=_alias("registered_agent", "SERVICE_OF_PROCESS", "REGISTERED_AGENT"),
    )
    responsible_party_name: Optional[str] = Field(
        default=None, validation_alias=_alias("responsible_party_name", "RESPONSIBLE_PARTY_NAME")
    )
    responsible_party_ssn: Optional[str] = Field(
        default=None, validation_alias=_alias("responsible_party_ssn", "RESPONSIBLE_PARTY_SSN", "SSN")
    )
    organizer_name: Optional[str] = Field(
        default=None, validation_alias=_alias("organizer_name", "ORGANIZER_NAME")
    )
    formation_date: Optional[str] = Field(
        default=None, validation_alias=_alias("formation_date", "DATE", "FORMATION_DATE")
    )
    purpose: Optional[str] = Field(default=None, validation_alias=_alias("purpose", "PURPOSE"))
    reason: Optional[str] = Field(default=None, validation_alias=_alias("reason", "REASON"))
    management: Optional[str] = Field(default=None, validation_alias=_alias("management", "MANAGEMENT"))
    employee_count: Optional[str] = Field(
        default=None, validation_alias=_alias("employee_count", "EMPLOYEE_COUNT", "EMPLOYEES")
    )
    member_count: Optional[str] = Field(
        default=None, validation_alias=_alias("member_count", "MEMBER_COUNT", "MEMBERS")
    )

    @field_validator("*", mode="before")
    @classmethod
    def _normalize(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        if value is None or info.field_name in REQUIRED_FIELDS:
            return value
        # Values are never logged; they may hold an SSN.
        log.warning("Ignoring intake field %s: unsupported %s value", info.field_name, type(value).__name__)
        return None

    def to_values(self, today: date) -> dict[str, str]:
        """Flatten to ``{field: value}`` with defaults for date, reason and responsible party."""
        values = {k: v for k, v in self.model_dump().items() if v}
        values.setdefault("formation_date", today.strftime("%m/%d/%Y"))
        values.setdefault("reason", DEFAULT_REASON)
        if "organizer_name" in values:
            values.setdefault("responsible_party_name", values["organizer_name"])
        return values


# ── Output envelope ──────────────────────────────────────────────────


GenerationMethod = Literal["filled", "overlaid", "synthesized", "placeholder"]


class GeneratedDocument(BaseModel):
    """A single produced artifact, carried as a base64 data URL."""

    filename: str
    mime: str = PDF_MIME
    url: str
    method: GenerationMethod

    @classmethod
    def from_bytes(cls, filename: str, mime: str, data: bytes, method: GenerationMethod) -> GeneratedDocument:
        encoded = base64.b64encode(data).decode("ascii")
        return cls(filename=filename, mime=mime, url=f"data:{mime};base64,{encoded}", method=method)

    def payload(self) -> bytes:
        """Decode the data URL back to raw bytes."""
        _, _, encoded = self.url.partition(";base64,")
        return base64.b64decode(encoded)


class GenerationResult(BaseModel):
    """Response envelope for one generation request.

    ``documents`` is keyed by ``FormType`` value.  When ``ok`` is false the
    mapping may be partial; failed forms are omitted, never half-written.
    """

    ok: bool = True
    documents: dict[str, GeneratedDocument] = Field(default_factory=dict)
    error: Optional[str] = None
    error_type: Optional[str] = None
