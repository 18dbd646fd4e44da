"""formation-docs: EIN applications and Articles of Organization/Incorporation as PDFs.

Usage::

    from formation_docs import DocumentGenerationEngine

    engine = DocumentGenerationEngine()
    result = engine.generate_sync({"business_name": "Acme LLC", "entity_type": "LLC", "state": "CA"})
    result.documents["ss4"].payload()  # PDF bytes
"""

from __future__ import annotations

from formation_docs.core.config import AppSettings
from formation_docs.engine import DocumentGenerationEngine, parse_intake
from formation_docs.exceptions import (
    FormationDocsError,
    IntakeInvalid,
    RenderFailure,
    SynthesisFailure,
    TemplateUnavailable,
)
from formation_docs.forms.registry import FormSpec, select_forms
from formation_docs.models import (
    BusinessIntake,
    FormType,
    GeneratedDocument,
    GenerationResult,
)

__all__ = [
    "AppSettings",
    "BusinessIntake",
    "DocumentGenerationEngine",
    "FormSpec",
    "FormType",
    "FormationDocsError",
    "GeneratedDocument",
    "GenerationResult",
    "IntakeInvalid",
    "RenderFailure",
    "SynthesisFailure",
    "TemplateUnavailable",
    "parse_intake",
    "select_forms",
]
