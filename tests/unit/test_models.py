"""Tests for the intake model and the output envelope."""

from __future__ import annotations

import base64
from datetime import date

import pytest
from pydantic import ValidationError

from formation_docs.models import (
    DEFAULT_REASON,
    PDF_MIME,
    BusinessIntake,
    GeneratedDocument,
    GenerationResult,
)


class TestBusinessIntake:
    def test_snake_case_keys(self) -> None:
        intake = BusinessIntake.model_validate({"business_name": "Acme LLC", "entity_type": "LLC"})
        assert intake.business_name == "Acme LLC"
        assert intake.entity_type == "LLC"
        assert intake.state is None

    def test_form_keys_are_accepted(self) -> None:
        intake = BusinessIntake.model_validate({
            "LEGAL_NAME": "Acme LLC",
            "ENTITY_TYPE": "LLC",
            "SERVICE_OF_PROCESS": "Pat Agent",
            "DATE": "02/01/2026",
        })
        assert intake.business_name == "Acme LLC"
        assert intake.registered_agent == "Pat Agent"
        assert intake.formation_date == "02/01/2026"

    def test_llc_name_alias(self) -> None:
        intake = BusinessIntake.model_validate({"LLC_NAME": "Acme LLC", "entity_type": "LLC"})
        assert intake.business_name == "Acme LLC"

    def test_strings_are_stripped(self) -> None:
        intake = BusinessIntake.model_validate({"business_name": "  Acme LLC \n", "entity_type": " LLC"})
        assert intake.business_name == "Acme LLC"
        assert intake.entity_type == "LLC"

    def test_blank_optional_is_absent(self) -> None:
        intake = BusinessIntake.model_validate({"business_name": "Acme", "entity_type": "LLC", "county": "   "})
        assert intake.county is None

    def test_blank_required_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BusinessIntake.model_validate({"business_name": "", "entity_type": "LLC"})

    def test_numbers_become_strings(self) -> None:
        intake = BusinessIntake.model_validate({"business_name": "Acme", "entity_type": "LLC", "employee_count": 3})
        assert intake.employee_count == "3"

    @pytest.mark.parametrize("bad", [True, {"ft": 3}, ["retail"]])
    def test_unsupported_optional_value_dropped(self, bad: object) -> None:
        intake = BusinessIntake.model_validate({
            "business_name": "Acme",
            "entity_type": "LLC",
            "member_count": bad,
            "employee_count": bad,
            "purpose": bad,
        })
        assert intake.member_count is None
        assert intake.employee_count is None
        assert intake.purpose is None

    def test_unsupported_required_value_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BusinessIntake.model_validate({"business_name": ["Acme"], "entity_type": "LLC"})

    def test_unknown_keys_ignored(self) -> None:
        intake = BusinessIntake.model_validate({"business_name": "Acme", "entity_type": "LLC", "favorite_color": "red"})
        assert not hasattr(intake, "favorite_color")

    def test_frozen(self) -> None:
        intake = BusinessIntake.model_validate({"business_name": "Acme", "entity_type": "LLC"})
        with pytest.raises(ValidationError):
            intake.business_name = "Other"  # type: ignore[misc]


class TestToValues:
    def test_defaults(self) -> None:
        intake = BusinessIntake.model_validate({"business_name": "Acme", "entity_type": "LLC"})
        values = intake.to_values(date(2026, 3, 2))
        assert values["formation_date"] == "03/02/2026"
        assert values["reason"] == DEFAULT_REASON
        assert "county" not in values

    def test_explicit_values_win(self) -> None:
        intake = BusinessIntake.model_validate({
            "business_name": "Acme",
            "entity_type": "LLC",
            "formation_date": "12/31/2025",
            "reason": "Banking purpose",
        })
        values = intake.to_values(date(2026, 3, 2))
        assert values["formation_date"] == "12/31/2025"
        assert values["reason"] == "Banking purpose"

    def test_organizer_is_responsible_party_fallback(self) -> None:
        intake = BusinessIntake.model_validate({"business_name": "Acme", "entity_type": "LLC", "organizer_name": "Sam"})
        assert intake.to_values(date(2026, 1, 1))["responsible_party_name"] == "Sam"

    def test_responsible_party_kept(self) -> None:
        intake = BusinessIntake.model_validate({
            "business_name": "Acme",
            "entity_type": "LLC",
            "organizer_name": "Sam",
            "responsible_party_name": "Alex",
        })
        assert intake.to_values(date(2026, 1, 1))["responsible_party_name"] == "Alex"


class TestGeneratedDocument:
    def test_data_url(self) -> None:
        doc = GeneratedDocument.from_bytes("a.pdf", PDF_MIME, b"%PDF-1.4 test", "synthesized")
        assert doc.url.startswith("data:application/pdf;base64,")
        assert doc.url.endswith(base64.b64encode(b"%PDF-1.4 test").decode("ascii"))
        assert doc.payload() == b"%PDF-1.4 test"

    def test_result_defaults(self) -> None:
        result = GenerationResult()
        assert result.ok is True
        assert result.documents == {}
        assert result.error is None

    def test_result_serializes(self) -> None:
        doc = GeneratedDocument.from_bytes("a.pdf", PDF_MIME, b"x", "filled")
        dumped = GenerationResult(documents={"ss4": doc}).model_dump(mode="json")
        assert dumped["documents"]["ss4"] == {
            "filename": "a.pdf",
            "mime": "application/pdf",
            "url": doc.url,
            "method": "filled",
        }
