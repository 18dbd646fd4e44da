"""Document generation endpoint."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from formation_docs.engine import DocumentGenerationEngine

log = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])

_STATUS_BY_ERROR = {
    "intake_invalid": 400,
    "synthesis_failure": 500,
}


@router.post("/")
@router.post("/api/generate")
async def generate(request: Request, payload: Any = Body(default=None)) -> JSONResponse:
    """Generate the SS-4 and Articles documents for the posted intake.

    Responds with the generation envelope: ``{ok, documents: {ss4: {filename,
    mime, url, method}, articles: {...}}, error, error_type}``.
    """
    engine: DocumentGenerationEngine = request.app.state.engine
    result = await engine.generate(payload if payload is not None else {})
    status = 200 if result.ok else _STATUS_BY_ERROR.get(result.error_type or "", 500)
    log.info("Responding with %d document(s), status %d", len(result.documents), status)
    return JSONResponse(status_code=status, content=result.model_dump(mode="json"))
