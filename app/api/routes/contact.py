from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from app.adapters.rate_limit.base import RateLimitResult
from app.api.deps import get_autosave_service, get_contact_service, read_json_object
from app.core.rate_limit import enforce_contact_rate_limit
from app.schemas.contact import AutosaveRequest, ContactResponse, OkResponse
from app.services.autosave_service import AutosaveService
from app.services.contact_service import ContactService

router = APIRouter(tags=["Contact"])


@router.post(
    "/contact",
    response_model=ContactResponse,
    response_model_exclude_none=True,
)
async def submit_contact(
    request: Request,
    rate: RateLimitResult = Depends(enforce_contact_rate_limit),
    service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    """Accept a contact form submission.

    The caller is rate limited before the body is read. A filled honeypot
    field is acknowledged without processing.

    Raises:
        ValidationAppError: 400 when the body is not a JSON object.
        RateLimitAppError: 429 when the caller exceeded its budget.
    """
    payload = await read_json_object(request)
    outcome = await run_in_threadpool(service.submit, payload)
    if outcome.honeypot:
        return ContactResponse(hp=True)
    return ContactResponse(remaining=rate.remaining)


@router.post("/form-autosave", response_model=OkResponse)
async def form_autosave(
    request: Request,
    service: AutosaveService = Depends(get_autosave_service),
) -> OkResponse:
    """Store a snapshot of a partially filled form (best effort)."""
    body = AutosaveRequest.model_validate(await read_json_object(request))
    await run_in_threadpool(
        service.save,
        selector=body.selector,
        data=body.data,
        failed_submit=body.failed_submit,
        user_agent=request.headers.get("user-agent", ""),
    )
    return OkResponse()
