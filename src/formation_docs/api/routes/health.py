"""Health check endpoints. Never require authentication."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


def _health_payload(service: str) -> dict[str, object]:
    return {
        "ok": True,
        "service": service,
        "status": "live",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health")
async def health(request: Request) -> dict[str, object]:
    """Liveness check for the server process."""
    return _health_payload(request.app.state.settings.observability.service_name)


@router.get("/agent/health")
async def agent_health() -> dict[str, object]:
    """Liveness check for the document generation engine."""
    return _health_payload("document_agent")


@router.get("/ready")
async def ready(request: Request) -> dict[str, str]:
    """Readiness check: the engine has been constructed."""
    if getattr(request.app.state, "engine", None) is None:
        return {"status": "starting"}
    return {"status": "ready"}
