"""Global exception handlers mapping errors to the ``{ok: false, error}`` envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from formation_docs.exceptions import FormationDocsError, IntakeInvalid

log = logging.getLogger(__name__)


def _envelope(error: str, error_type: str) -> dict[str, object]:
    return {"ok": False, "documents": {}, "error": error, "error_type": error_type}


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_envelope(str(exc.detail), "http_error"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(IntakeInvalid)
    async def handle_intake_error(request: Request, exc: IntakeInvalid) -> JSONResponse:
        return JSONResponse(status_code=400, content=_envelope(str(exc), "intake_invalid"))

    @app.exception_handler(FormationDocsError)
    async def handle_generic_error(request: Request, exc: FormationDocsError) -> JSONResponse:
        log.error("Unhandled %s: %s", type(exc).__name__, exc)
        return JSONResponse(status_code=500, content=_envelope(str(exc), "formation_docs_error"))
