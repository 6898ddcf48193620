"""Invitation API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_invitation_service
from api.v1.schemas.invitation import (
    AcceptInvitationResponse,
    CreateInvitationRequest,
    InvitationCreatedResponse,
    InvitationListResponse,
    InvitationResponse,
    InvitationViewResponse,
    ResendInvitationResponse,
    ShopSummaryResponse,
)
from core.rate_limit import limiter
from domain.entities.shop import ShopRole
from domain.services.invitation_service import InvitationService

router = APIRouter(prefix="/invitations", tags=["invitations"])


@router.post(
    "",
    response_model=InvitationCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Invite a staff member",
    responses={
        201: {"description": "Invitation created and emailed"},
        403: {"description": "Insufficient permissions (Manager+ only)"},
        404: {"description": "Shop or inviter not found"},
        409: {"description": "Duplicate invitation or already a member"},
        502: {"description": "Invitation email could not be delivered"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_invitation(
    request: Request,
    body: CreateInvitationRequest,
    user: CurrentUser,
    service: InvitationService = Depends(get_invitation_service),
) -> InvitationCreatedResponse:
    """Invite someone to a shop by email. Requires Manager+ role."""
    invitation = await service.create_invitation(
        shop_id=body.shop_id,
        user_id=user.id,
        email=body.email,
        role=ShopRole.from_label(body.role),
    )
    return InvitationCreatedResponse(data=InvitationResponse.from_entity(invitation))


@router.get(
    "/token/{token}",
    response_model=InvitationViewResponse,
    summary="View invitation",
    responses={
        200: {"description": "Invitation details"},
        400: {"description": "Invitation expired or already processed"},
        404: {"description": "Invitation not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_invitation_by_token(
    request: Request,
    token: str,
    service: InvitationService = Depends(get_invitation_service),
) -> InvitationViewResponse:
    """Show what an invitation link grants. No authentication required."""
    view = await service.get_by_token(token)
    return InvitationViewResponse(
        email=view.email,
        role=view.role.label,
        expires_at=view.expires_at,
        shop=ShopSummaryResponse(id=view.shop.id, name=view.shop.name),
    )


@router.post(
    "/token/{token}/accept",
    response_model=AcceptInvitationResponse,
    summary="Accept invitation",
    responses={
        200: {"description": "Invitation accepted, user added to the shop"},
        400: {"description": "Invitation expired or already processed"},
        403: {"description": "Email mismatch"},
        404: {"description": "Invitation not found"},
        409: {"description": "Already a member"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def accept_invitation(
    request: Request,
    token: str,
    user: CurrentUser,
    service: InvitationService = Depends(get_invitation_service),
) -> AcceptInvitationResponse:
    """Accept an invitation as the signed-in user."""
    accepted = await service.accept_invitation(token=token, user_id=user.id)
    return AcceptInvitationResponse(
        shop=ShopSummaryResponse(id=accepted.shop.id, name=accepted.shop.name),
        role=accepted.role.label,
    )


@router.get(
    "/shop/{shop_id}",
    response_model=InvitationListResponse,
    summary="List shop invitations",
    responses={
        200: {"description": "Invitations of the shop, newest first"},
        403: {"description": "Not a member"},
        404: {"description": "Shop not found"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_shop_invitations(
    request: Request,
    shop_id: UUID,
    user: CurrentUser,
    service: InvitationService = Depends(get_invitation_service),
) -> InvitationListResponse:
    """List all invitations for a shop. Requires membership."""
    invitations = await service.get_shop_invitations(shop_id, user.id)
    data = [InvitationResponse.from_entity(inv) for inv in invitations]
    return InvitationListResponse(data=data, meta={"total": len(data)})


@router.delete(
    "/{invitation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Cancel invitation",
    responses={
        204: {"description": "Invitation cancelled"},
        400: {"description": "Invitation is not pending"},
        403: {"description": "Insufficient permissions (Manager+ only)"},
        404: {"description": "Invitation not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def cancel_invitation(
    request: Request,
    invitation_id: UUID,
    user: CurrentUser,
    service: InvitationService = Depends(get_invitation_service),
) -> None:
    """Cancel a pending invitation. Requires Manager+ role."""
    await service.cancel_invitation(invitation_id=invitation_id, user_id=user.id)
    return None


@router.post(
    "/{invitation_id}/resend",
    response_model=ResendInvitationResponse,
    summary="Resend invitation",
    responses={
        200: {"description": "New link issued and emailed"},
        400: {"description": "Invitation is not pending"},
        403: {"description": "Insufficient permissions (Manager+ only)"},
        404: {"description": "Invitation not found"},
        502: {"description": "Invitation email could not be delivered"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def resend_invitation(
    request: Request,
    invitation_id: UUID,
    user: CurrentUser,
    service: InvitationService = Depends(get_invitation_service),
) -> ResendInvitationResponse:
    """Issue a fresh link with a new 7-day expiry and email it again."""
    invitation = await service.resend_invitation(invitation_id=invitation_id, user_id=user.id)
    return ResendInvitationResponse(expires_at=invitation.expires_at)
