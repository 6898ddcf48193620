"""Employee API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_employee_service
from api.v1.schemas.employee import (
    EmployeeCreate,
    EmployeeDetailResponse,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
    PaginationMeta,
)
from core.rate_limit import limiter
from domain.entities.shop import ShopRole
from domain.services.employee_service import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, EmployeeService

# Shop-scoped employee routes (list, add)
shop_employees_router = APIRouter(prefix="/shops/{shop_id}/employees", tags=["employees"])

# Membership-scoped routes (role change, removal)
employees_router = APIRouter(prefix="/employees", tags=["employees"])


@shop_employees_router.get(
    "",
    response_model=EmployeeListResponse,
    summary="List employees",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_employees(
    request: Request,
    shop_id: UUID,
    user: CurrentUser,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeListResponse:
    """List the shop's active employees one page at a time."""
    result = await service.list_for_shop(shop_id, user.id, page=page, limit=limit)
    return EmployeeListResponse(
        data=[EmployeeResponse.from_entity(m) for m in result.items],
        meta=PaginationMeta(
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages,
        ),
    )


@shop_employees_router.post(
    "",
    response_model=EmployeeDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an employee",
    responses={
        403: {"description": "Insufficient permissions (Manager+ only)"},
        404: {"description": "Shop or user not found"},
        409: {"description": "Already a member"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_employee(
    request: Request,
    shop_id: UUID,
    body: EmployeeCreate,
    user: CurrentUser,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeDetailResponse:
    """Add an existing user to the shop directly, without an invitation."""
    member = await service.add(
        shop_id=shop_id,
        user_id=user.id,
        target_user_id=body.user_id,
        role=ShopRole.from_label(body.role),
    )
    return EmployeeDetailResponse(data=EmployeeResponse.from_entity(member))


@employees_router.patch(
    "/{member_id}",
    response_model=EmployeeDetailResponse,
    summary="Change an employee's role",
    responses={
        400: {"description": "Would leave the shop without an owner"},
        403: {"description": "Insufficient permissions"},
        404: {"description": "Employee not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_employee(
    request: Request,
    member_id: UUID,
    body: EmployeeUpdate,
    user: CurrentUser,
    service: EmployeeService = Depends(get_employee_service),
) -> EmployeeDetailResponse:
    """Change an employee's role. Requires Manager+ role."""
    member = await service.update_role(member_id, user.id, ShopRole.from_label(body.role))
    return EmployeeDetailResponse(data=EmployeeResponse.from_entity(member))


@employees_router.delete(
    "/{member_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove an employee",
    responses={
        400: {"description": "Would leave the shop without an owner"},
        403: {"description": "Insufficient permissions"},
        404: {"description": "Employee not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def remove_employee(
    request: Request,
    member_id: UUID,
    user: CurrentUser,
    service: EmployeeService = Depends(get_employee_service),
) -> None:
    """Remove an employee from the shop. Requires Manager+ role."""
    await service.remove(member_id, user.id)
    return None
