"""Authentication API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_auth_service
from api.v1.schemas.auth import LocalLoginRequest, ProfileResponse, RefreshRequest, TokenResponse
from core.config import settings
from core.exceptions import AuthorizationError
from core.rate_limit import limiter
from domain.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login/local",
    response_model=TokenResponse,
    summary="Sign in with email (local provider)",
    responses={403: {"description": "Local sign-in is disabled"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def login_local(
    request: Request,
    body: LocalLoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Sign in by email, creating the profile on first use. Disabled in production."""
    if settings.is_production or not settings.local_login_enabled:
        raise AuthorizationError("Local sign-in is disabled")
    pair = await service.login_local(body.email, body.name)
    return TokenResponse.model_validate(pair)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh tokens",
    responses={401: {"description": "Invalid, expired or revoked refresh token"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def refresh_tokens(
    request: Request,
    body: RefreshRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange a refresh token for a new token pair. The old refresh token stops working."""
    pair = await service.refresh(body.refresh_token)
    return TokenResponse.model_validate(pair)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Log out",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def logout(
    request: Request,
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> None:
    """Revoke the current user's refresh token."""
    await service.logout(user.id)
    return None


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Current user",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    service: AuthService = Depends(get_auth_service),
) -> ProfileResponse:
    """Get the signed-in user's profile."""
    profile = await service.get_profile(user.id)
    return ProfileResponse(
        id=profile.id,
        email=profile.email,
        name=profile.name,
        profile_image=profile.profile_image,
        provider=profile.provider.value,
        shop_id=profile.shop_id,
        created_at=profile.created_at,
    )
