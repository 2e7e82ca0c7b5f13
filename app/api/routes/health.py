from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request) -> dict:
    """Liveness check that also reports which optional sinks are wired.

    Missing sinks are not failures: the site degrades to per-process rate
    limiting and skips e-mail/persistence.
    """

    state = request.app.state
    return {
        "status": "ok",
        "kv": state.kv_client is not None,
        "email": state.email_sender is not None,
    }
