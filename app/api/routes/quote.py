from __future__ import annotations

from fastapi import APIRouter

from app.schemas.quote import QuoteLineOut, QuoteRequest, QuoteResponse
from app.services.calculator import calculate_quote

router = APIRouter(tags=["Quote"])


@router.post("/quote", response_model=QuoteResponse)
def quote(body: QuoteRequest) -> QuoteResponse:
    """Price the selected repair options."""
    result = calculate_quote(
        ssd=body.ssd,
        windows=body.windows,
        deep_clean=body.deep_clean,
        gpu_service=body.gpu_service,
        data_rescue=body.data_rescue,
        locale=body.locale,
    )
    return QuoteResponse(
        locale=result.locale,
        title=result.title,
        lines=[
            QuoteLineOut(key=line.key, label=line.label, amount=line.amount)
            for line in result.lines
        ],
        total=result.total,
        total_label=result.total_label,
        currency=result.currency,
        formatted=result.formatted,
    )
