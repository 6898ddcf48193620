"""Revenue API routes."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_revenue_service
from api.v1.schemas.revenue import RevenueSummaryResponse
from core.rate_limit import limiter
from domain.services.revenue_service import RevenueService

router = APIRouter(prefix="/shops/{shop_id}/revenue", tags=["revenue"])


@router.get(
    "",
    response_model=RevenueSummaryResponse,
    summary="Revenue summary",
    responses={
        400: {"description": "start is after end"},
        403: {"description": "Not a member"},
        404: {"description": "Shop not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_revenue(
    request: Request,
    shop_id: UUID,
    user: CurrentUser,
    start: date = Query(..., description="First day, inclusive"),
    end: date = Query(..., description="Last day, inclusive"),
    service: RevenueService = Depends(get_revenue_service),
) -> RevenueSummaryResponse:
    """Sum the shop's appointment amounts over a period. Cancelled ones are skipped."""
    summary = await service.summarize(shop_id, user.id, start, end)
    return RevenueSummaryResponse.from_entity(summary)
