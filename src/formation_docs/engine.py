"""Document generation engine: the per-form fallback pipeline.

For every selected form::

    FETCH_TEMPLATE ─ ok ──> POPULATE_FIELDS ─ >0 set ──> Filled
          │                       └─ 0 set ──> OVERLAY ──> Overlaid
          └─ unavailable ──> SYNTHESIZE ──> Synthesized

A ``RenderFailure`` in overlay or synthesis degrades to a text ``Placeholder``;
only when that also fails is the form ``Failed`` and omitted from the result.

Zero populated fields is treated as "no fillable form", even though a
template could legitimately have no intake-relevant fields.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from io import BytesIO
from typing import Any, Callable, Mapping, Union

import structlog
from pydantic import ValidationError
from pypdf import PdfWriter
from pypdf.errors import PyPdfError

from formation_docs.core.config import AppSettings
from formation_docs.exceptions import (
    IntakeInvalid,
    RenderFailure,
    SynthesisFailure,
    TemplateUnavailable,
)
from formation_docs.forms.registry import FormSpec, select_forms
from formation_docs.models import (
    PDF_MIME,
    REQUIRED_FIELDS,
    TEXT_MIME,
    BusinessIntake,
    GeneratedDocument,
    GenerationResult,
)
from formation_docs.pdf.overlay import render_overlay
from formation_docs.pdf.placeholder import placeholder_filename, render_placeholder
from formation_docs.pdf.populator import load_template, populate_fields
from formation_docs.pdf.synthesizer import DocumentSynthesizer
from formation_docs.templates.fetcher import TemplateFetcher

log = logging.getLogger(__name__)

_ABSENT_ERRORS = frozenset({"missing", "string_type"})


# ── Stage outcomes ───────────────────────────────────────────────────


@dataclass(frozen=True)
class Filled:
    data: bytes
    fields_set: int


@dataclass(frozen=True)
class Overlaid:
    data: bytes
    strings_drawn: int


@dataclass(frozen=True)
class Synthesized:
    data: bytes
    reason: str


@dataclass(frozen=True)
class Placeholder:
    data: bytes
    reason: str


@dataclass(frozen=True)
class Failed:
    error: str


StageOutcome = Union[Filled, Overlaid, Synthesized, Placeholder, Failed]


def _field_name(key: str) -> str:
    """Resolve an intake key such as ``LEGAL_NAME`` to its model field name."""
    for name, info in BusinessIntake.model_fields.items():
        if key == name or key in getattr(info.validation_alias, "choices", ()):
            return name
    return key


def parse_intake(data: BusinessIntake | Mapping[str, Any]) -> BusinessIntake:
    """Validate raw intake data.

    Raises:
        IntakeInvalid: If business name or entity type is missing or not text, or the intake is not an object.
    """
    if isinstance(data, BusinessIntake):
        return data
    try:
        return BusinessIntake.model_validate(data)
    except ValidationError as exc:
        missing: list[str] = []
        invalid: list[str] = []
        for err in exc.errors():
            name = _field_name(str(err["loc"][0])) if err["loc"] else "intake"
            if name in REQUIRED_FIELDS and err["type"] in _ABSENT_ERRORS:
                missing.append(name)
            else:
                invalid.append(name)
        if missing:
            message = f"Missing required intake field(s): {', '.join(missing)}"
        else:
            message = f"Invalid intake field(s): {', '.join(invalid)}"
        raise IntakeInvalid(message, missing=missing) from exc


def _write(writer: PdfWriter) -> bytes:
    buffer = BytesIO()
    try:
        writer.write(buffer)
    except (PyPdfError, ValueError, TypeError, KeyError) as exc:
        raise RenderFailure(f"Could not write PDF: {exc}") from exc
    return buffer.getvalue()


class DocumentGenerationEngine:
    """Produces the filing documents for one intake.

    Stateless between calls: every intake and its documents are request-scoped.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        fetcher: TemplateFetcher | None = None,
        synthesizer: DocumentSynthesizer | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._fetcher = fetcher or TemplateFetcher(self._settings.fetch)
        self._synthesizer = synthesizer or DocumentSynthesizer(self._settings.pdf)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    # ── Public API ───────────────────────────────────────────────────

    async def generate(self, intake: BusinessIntake | Mapping[str, Any]) -> GenerationResult:
        """Generate every form required by *intake*.

        Never raises for expected failures: invalid intake and unrecoverable
        forms are reported through ``ok``/``error`` on the result.
        """
        try:
            parsed = parse_intake(intake)
        except IntakeInvalid as exc:
            log.warning("Rejected intake: %s", exc)
            return GenerationResult(ok=False, error=str(exc), error_type="intake_invalid")

        specs = select_forms(parsed)
        generated_at = self._clock()
        values = parsed.to_values(generated_at.date())

        outcomes = await asyncio.gather(
            *(self.run_form(spec, values, generated_at) for spec in specs),
            return_exceptions=True,
        )

        documents: dict[str, GeneratedDocument] = {}
        failures: list[SynthesisFailure] = []
        for spec, outcome in zip(specs, outcomes):
            if isinstance(outcome, BaseException):
                log.error("Pipeline for %s crashed", spec.key, exc_info=outcome)
                outcome = Failed(error=f"{type(outcome).__name__}: {outcome}")
            if isinstance(outcome, Failed):
                failures.append(SynthesisFailure(spec.form_type.value, outcome.error))
                continue
            documents[spec.form_type.value] = self._package(spec, outcome)

        log.info(
            "Generated %d document(s): %s",
            len(documents),
            ", ".join(f"{k}={d.method}" for k, d in documents.items()) or "none",
        )
        if failures:
            return GenerationResult(
                ok=False,
                documents=documents,
                error="; ".join(str(f) for f in failures),
                error_type="synthesis_failure",
            )
        return GenerationResult(documents=documents)

    def generate_sync(self, intake: BusinessIntake | Mapping[str, Any]) -> GenerationResult:
        """Blocking wrapper around :meth:`generate` for scripts and the CLI."""
        return asyncio.run(self.generate(intake))

    async def run_form(
        self,
        spec: FormSpec,
        values: Mapping[str, str],
        generated_at: datetime,
    ) -> StageOutcome:
        """Run the fetch, populate/overlay, synthesize pipeline for one form."""
        with structlog.contextvars.bound_contextvars(form=spec.key):
            reason = "no official template"
            if spec.template_url:
                fetched = await self._fetcher.fetch(spec.template_url)
                if fetched.available:
                    try:
                        return await asyncio.to_thread(
                            self._from_template, spec, fetched.content, values, generated_at
                        )
                    except TemplateUnavailable as exc:
                        log.warning("Downloaded template unusable: %s", exc.reason)
                        reason = exc.reason
                else:
                    reason = fetched.reason
            log.info("Synthesizing %s (%s)", spec.key, reason)
            return await asyncio.to_thread(self._synthesize, spec, values, generated_at, reason)

    # ── Stages ───────────────────────────────────────────────────────

    def _from_template(
        self,
        spec: FormSpec,
        content: bytes,
        values: Mapping[str, str],
        generated_at: datetime,
    ) -> StageOutcome:
        writer = load_template(content, spec.template_url or "")

        try:
            fields_set = populate_fields(writer, spec.field_values(values))
        except (PyPdfError, KeyError, ValueError, TypeError) as exc:
            log.warning("Field population failed, falling back to overlay: %s", exc)
            fields_set = 0

        try:
            if fields_set > 0:
                return Filled(data=_write(writer), fields_set=fields_set)
            log.info("No usable fields on %s template, overlaying text", spec.key)
            drawn = render_overlay(writer, spec.overlay_values(values))
            return Overlaid(data=_write(writer), strings_drawn=drawn)
        except RenderFailure as exc:
            log.error("Rendering %s onto template failed: %s", spec.key, exc)
            return self._placeholder(spec, values, generated_at, str(exc))

    def _synthesize(
        self,
        spec: FormSpec,
        values: Mapping[str, str],
        generated_at: datetime,
        reason: str,
    ) -> StageOutcome:
        try:
            data = self._synthesizer.synthesize(spec.title, spec.row_values(values), generated_at)
        except RenderFailure as exc:
            log.error("Synthesis of %s failed: %s", spec.key, exc)
            return self._placeholder(spec, values, generated_at, str(exc))
        return Synthesized(data=data, reason=reason)

    def _placeholder(
        self,
        spec: FormSpec,
        values: Mapping[str, str],
        generated_at: datetime,
        reason: str,
    ) -> StageOutcome:
        try:
            data = render_placeholder(
                spec.title, spec.row_values(values), generated_at, self._settings.pdf.disclaimer
            )
        except ValueError as exc:
            return Failed(error=f"no document could be produced ({reason}; {exc})")
        log.warning("Degraded %s to a text placeholder", spec.key)
        return Placeholder(data=data, reason=reason)

    # ── Packaging ────────────────────────────────────────────────────

    @staticmethod
    def _package(spec: FormSpec, outcome: StageOutcome) -> GeneratedDocument:
        if isinstance(outcome, Filled):
            return GeneratedDocument.from_bytes(spec.filename, PDF_MIME, outcome.data, "filled")
        if isinstance(outcome, Overlaid):
            return GeneratedDocument.from_bytes(spec.filename, PDF_MIME, outcome.data, "overlaid")
        if isinstance(outcome, Synthesized):
            return GeneratedDocument.from_bytes(spec.filename, PDF_MIME, outcome.data, "synthesized")
        if isinstance(outcome, Placeholder):
            return GeneratedDocument.from_bytes(
                placeholder_filename(spec.filename), TEXT_MIME, outcome.data, "placeholder"
            )
        raise TypeError(f"Cannot package outcome {outcome!r}")
