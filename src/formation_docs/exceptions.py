"""Exception hierarchy for formation-docs."""


class FormationDocsError(Exception):
    """Base exception for all formation-docs errors."""


class TemplateUnavailable(FormationDocsError):
    """Raised when an official template cannot be fetched or parsed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Template unavailable ({reason}): {url}")
        self.url = url
        self.reason = reason


class RenderFailure(FormationDocsError):
    """Raised when the PDF library cannot embed a font or write page content."""


class IntakeInvalid(FormationDocsError):
    """Raised when the intake lacks the fields needed to select documents."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


class SynthesisFailure(FormationDocsError):
    """Raised when no document could be produced for a form by any means."""

    def __init__(self, form_id: str, message: str) -> None:
        super().__init__(f"{form_id}: {message}")
        self.form_id = form_id
