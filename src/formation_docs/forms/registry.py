"""Static FormSpec tables and the rules that pick forms for an intake.

Each ``FormSpec`` carries the three mappings used by the generation tiers:

* ``field_map``: interactive PDF field name -> intake key (field population)
* ``overlay``:   fixed-coordinate draw instructions (overlay rendering)
* ``rows``:      printed label -> intake keys, in order (synthesis)

Overlay coordinates are tuned to the published revision of each template and
are in PDF points from the bottom-left corner of the first page.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from formation_docs.models import BusinessIntake, FormType

log = logging.getLogger(__name__)

Color = tuple[float, float, float]
BLACK: Color = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class OverlayText:
    """Draw the value of ``key`` at ``(x, y)`` on the template's first page."""

    key: str
    x: float
    y: float
    size: float = 10
    font: str = "Helvetica"
    color: Color = BLACK


@dataclass(frozen=True)
class Row:
    """A synthesized label/value row; the first non-empty source key wins."""

    label: str
    sources: tuple[str, ...]


@dataclass(frozen=True)
class FormSpec:
    """Static per-form configuration. Defined once at import, read-only."""

    form_type: FormType
    key: str
    title: str
    filename: str
    template_url: str | None = None
    field_map: Mapping[str, str] = field(default_factory=dict)
    overlay: tuple[OverlayText, ...] = ()
    rows: tuple[Row, ...] = ()

    def field_values(self, values: Mapping[str, str]) -> dict[str, str]:
        """Project intake values onto PDF field names, dropping empty ones."""
        return {name: values[key] for name, key in self.field_map.items() if values.get(key)}

    def overlay_values(self, values: Mapping[str, str]) -> list[tuple[OverlayText, str]]:
        return [(item, values[item.key]) for item in self.overlay if values.get(item.key)]

    def row_values(self, values: Mapping[str, str]) -> list[tuple[str, str]]:
        """Resolve printed rows in order, skipping rows with no value."""
        resolved: list[tuple[str, str]] = []
        for row in self.rows:
            value = next((values[k] for k in row.sources if values.get(k)), "")
            if value:
                resolved.append((row.label, value))
        return resolved


# ── SS-4 ─────────────────────────────────────────────────────────────

_SS4_PAGE = "topmostSubform[0].Page1[0]"

SS4 = FormSpec(
    form_type=FormType.SS4,
    key="ss4",
    title="Application for Employer Identification Number (SS-4)",
    filename="SS-4_EIN_Application.pdf",
    template_url="https://www.irs.gov/pub/irs-pdf/fss4.pdf",
    field_map={
        f"{_SS4_PAGE}.f1_1[0]": "business_name",
        f"{_SS4_PAGE}.f1_2[0]": "trade_name",
        f"{_SS4_PAGE}.f1_4[0]": "mailing_address",
        f"{_SS4_PAGE}.f1_6[0]": "business_address",
        f"{_SS4_PAGE}.f1_8[0]": "county",
        f"{_SS4_PAGE}.f1_9[0]": "responsible_party_name",
        f"{_SS4_PAGE}.f1_10[0]": "responsible_party_ssn",
        f"{_SS4_PAGE}.f1_16[0]": "formation_date",
        f"{_SS4_PAGE}.f1_22[0]": "purpose",
    },
    overlay=(
        OverlayText("business_name", 150, 650),
        OverlayText("mailing_address", 150, 620),
        OverlayText("responsible_party_name", 150, 590),
    ),
    rows=(
        Row("Legal Name:", ("business_name",)),
        Row("Trade Name:", ("trade_name",)),
        Row("Business Address:", ("business_address",)),
        Row("Mailing Address:", ("mailing_address",)),
        Row("County:", ("county",)),
        Row("State:", ("state",)),
        Row("Entity Type:", ("entity_type",)),
        Row("Responsible Party:", ("responsible_party_name",)),
        Row("Responsible Party SSN:", ("responsible_party_ssn",)),
        Row("Date:", ("formation_date",)),
        Row("Reason for Application:", ("reason",)),
        Row("Principal Activity:", ("purpose",)),
        Row("Employees Expected:", ("employee_count",)),
        Row("Number of Members:", ("member_count",)),
    ),
)

# ── Articles ─────────────────────────────────────────────────────────

_LLC_ROWS = (
    Row("LLC Name:", ("business_name",)),
    Row("Entity Type:", ("entity_type",)),
    Row("State:", ("state",)),
    Row("Business Address:", ("business_address",)),
    Row("Mailing Address:", ("mailing_address",)),
    Row("Registered Agent:", ("registered_agent",)),
    Row("Management:", ("management",)),
    Row("Purpose:", ("purpose",)),
    Row("Organizer:", ("organizer_name", "responsible_party_name")),
    Row("Date:", ("formation_date",)),
)

_CORP_ROWS = (
    Row("Corporation Name:", ("business_name",)),
    Row("Entity Type:", ("entity_type",)),
    Row("State:", ("state",)),
    Row("Business Address:", ("business_address",)),
    Row("Mailing Address:", ("mailing_address",)),
    Row("Registered Agent:", ("registered_agent",)),
    Row("Purpose:", ("purpose",)),
    Row("Incorporator:", ("organizer_name", "responsible_party_name")),
    Row("Date:", ("formation_date",)),
)

CA_LLC_ARTICLES = FormSpec(
    form_type=FormType.ARTICLES,
    key="articles:CA:LLC",
    title="Articles of Organization (Form LLC-1)",
    filename="Articles_of_Organization.pdf",
    template_url="https://bpd.cdn.sos.ca.gov/llc/forms/llc-1.pdf",
    field_map={
        "LLC Name": "business_name",
        "Business Address": "business_address",
        "Mailing Address": "mailing_address",
        "Agent Name": "registered_agent",
        "Organizer Name": "organizer_name",
    },
    overlay=(
        OverlayText("business_name", 150, 600, size=12),
        OverlayText("registered_agent", 150, 570),
        OverlayText("business_address", 150, 540),
    ),
    rows=_LLC_ROWS,
)

CA_CORP_ARTICLES = FormSpec(
    form_type=FormType.ARTICLES,
    key="articles:CA:CORPORATION",
    title="Articles of Incorporation (Form ARTS-GS)",
    filename="Articles_of_Incorporation.pdf",
    template_url="https://bpd.cdn.sos.ca.gov/corp/pdf/articles/corp-artsgs.pdf",
    field_map={
        "Corporate Name": "business_name",
        "Business Address": "business_address",
        "Mailing Address": "mailing_address",
        "Agent Name": "registered_agent",
        "Incorporator Name": "organizer_name",
    },
    overlay=(
        OverlayText("business_name", 150, 610, size=12),
        OverlayText("business_address", 150, 560),
        OverlayText("registered_agent", 150, 500),
    ),
    rows=_CORP_ROWS,
)

GENERIC_LLC_ARTICLES = FormSpec(
    form_type=FormType.ARTICLES,
    key="articles:generic:LLC",
    title="Articles of Organization",
    filename="Articles_of_Organization.pdf",
    rows=_LLC_ROWS,
)

GENERIC_CORP_ARTICLES = FormSpec(
    form_type=FormType.ARTICLES,
    key="articles:generic:CORPORATION",
    title="Articles of Incorporation",
    filename="Articles_of_Incorporation.pdf",
    rows=_CORP_ROWS,
)

GENERIC_ENTITY_ARTICLES = FormSpec(
    form_type=FormType.ARTICLES,
    key="articles:generic:OTHER",
    title="Articles of Organization",
    filename="Articles_of_Organization.pdf",
    rows=(
        Row("Entity Name:", ("business_name",)),
        Row("Entity Type:", ("entity_type",)),
        Row("State:", ("state",)),
        Row("Business Address:", ("business_address",)),
        Row("Mailing Address:", ("mailing_address",)),
        Row("Registered Agent:", ("registered_agent",)),
        Row("Management:", ("management",)),
        Row("Purpose:", ("purpose",)),
        Row("Organizer:", ("organizer_name", "responsible_party_name")),
        Row("Date:", ("formation_date",)),
    ),
)


class EntityKind(str, Enum):
    LLC = "LLC"
    CORPORATION = "CORPORATION"
    OTHER = "OTHER"


_ARTICLES_BY_JURISDICTION: dict[tuple[str, EntityKind], FormSpec] = {
    ("CA", EntityKind.LLC): CA_LLC_ARTICLES,
    ("CA", EntityKind.CORPORATION): CA_CORP_ARTICLES,
}

_GENERIC_ARTICLES: dict[EntityKind, FormSpec] = {
    EntityKind.LLC: GENERIC_LLC_ARTICLES,
    EntityKind.CORPORATION: GENERIC_CORP_ARTICLES,
    EntityKind.OTHER: GENERIC_ENTITY_ARTICLES,
}

ALL_SPECS: tuple[FormSpec, ...] = (
    SS4,
    CA_LLC_ARTICLES,
    CA_CORP_ARTICLES,
    GENERIC_LLC_ARTICLES,
    GENERIC_CORP_ARTICLES,
    GENERIC_ENTITY_ARTICLES,
)

# ── Normalization ────────────────────────────────────────────────────

_LLC_TOKENS = frozenset({
    "llc", "pllc", "lllc", "limited liability company", "limited liability co",
    "ltd liability company", "ltd liability co", "professional llc", "series llc",
})
_CORP_TOKENS = frozenset({
    "corp", "corporation", "inc", "incorporated", "c corp", "s corp",
    "c corporation", "s corporation", "professional corporation", "pc",
    "nonprofit", "non profit", "nonprofit corporation", "not for profit corporation",
    "benefit corporation", "public benefit corporation",
})
_LLC_COMPACT = frozenset(t.replace(" ", "") for t in _LLC_TOKENS)
_CORP_COMPACT = frozenset(t.replace(" ", "") for t in _CORP_TOKENS)

_STATE_NAMES = {
    "ALABAMA": "AL", "ALASKA": "AK", "ARIZONA": "AZ", "ARKANSAS": "AR",
    "CALIFORNIA": "CA", "COLORADO": "CO", "CONNECTICUT": "CT", "DELAWARE": "DE",
    "DISTRICT OF COLUMBIA": "DC", "FLORIDA": "FL", "GEORGIA": "GA", "HAWAII": "HI",
    "IDAHO": "ID", "ILLINOIS": "IL", "INDIANA": "IN", "IOWA": "IA",
    "KANSAS": "KS", "KENTUCKY": "KY", "LOUISIANA": "LA", "MAINE": "ME",
    "MARYLAND": "MD", "MASSACHUSETTS": "MA", "MICHIGAN": "MI", "MINNESOTA": "MN",
    "MISSISSIPPI": "MS", "MISSOURI": "MO", "MONTANA": "MT", "NEBRASKA": "NE",
    "NEVADA": "NV", "NEW HAMPSHIRE": "NH", "NEW JERSEY": "NJ", "NEW MEXICO": "NM",
    "NEW YORK": "NY", "NORTH CAROLINA": "NC", "NORTH DAKOTA": "ND", "OHIO": "OH",
    "OKLAHOMA": "OK", "OREGON": "OR", "PENNSYLVANIA": "PA", "RHODE ISLAND": "RI",
    "SOUTH CAROLINA": "SC", "SOUTH DAKOTA": "SD", "TENNESSEE": "TN", "TEXAS": "TX",
    "UTAH": "UT", "VERMONT": "VT", "VIRGINIA": "VA", "WASHINGTON": "WA",
    "WEST VIRGINIA": "WV", "WISCONSIN": "WI", "WYOMING": "WY",
}


def normalize_entity_type(entity_type: str) -> EntityKind:
    """Map free-form entity type text (``"L.L.C."``, ``"S-Corp"``) to an ``EntityKind``."""
    token = re.sub(r"[.\-_]", " ", entity_type.lower())
    token = re.sub(r"\s+", " ", token).strip()
    compact = token.replace(" ", "")
    if compact in _LLC_COMPACT:
        return EntityKind.LLC
    if compact in _CORP_COMPACT:
        return EntityKind.CORPORATION
    return EntityKind.OTHER


def normalize_state(state: str | None) -> str:
    """Return the USPS code for a state code or name; unknown input is upper-cased."""
    if not state:
        return ""
    upper = re.sub(r"\s+", " ", state.strip().upper())
    return _STATE_NAMES.get(upper, upper)


def articles_spec(entity_type: str, state: str | None) -> FormSpec:
    """Pick the Articles FormSpec for an entity/state pair.

    Known jurisdictions get their official template; every other combination,
    including entity types that are not recognized, gets generic synthesized
    articles.
    """
    kind = normalize_entity_type(entity_type)
    return _ARTICLES_BY_JURISDICTION.get((normalize_state(state), kind), _GENERIC_ARTICLES[kind])


def select_forms(intake: BusinessIntake) -> list[FormSpec]:
    """Return the FormSpecs to generate: always the SS-4, then the articles."""
    articles = articles_spec(intake.entity_type, intake.state)
    if articles.template_url is None:
        log.info(
            "No state template for %s/%s, using %s",
            intake.entity_type, normalize_state(intake.state) or "?", articles.key,
        )
    return [SS4, articles]
