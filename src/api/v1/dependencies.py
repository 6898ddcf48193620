"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from api.dependencies.auth import get_auth_provider
from core.config import settings
from domain.gateways.email_gateway import IEmailGateway
from domain.services.appointment_service import AppointmentService
from domain.services.auth_service import AuthService
from domain.services.dog_service import DogService
from domain.services.employee_service import EmployeeService
from domain.services.grooming_type_service import GroomingTypeService
from domain.services.invitation_service import InvitationService
from domain.services.revenue_service import RevenueService
from domain.services.shop_service import ShopService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.email.factory import build_email_gateway


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_email_gateway() -> IEmailGateway:
    """Get the configured email gateway."""
    return build_email_gateway(settings)


@lru_cache
def get_invitation_service() -> InvitationService:
    """Get Invitation service instance."""
    return InvitationService(
        get_uow_factory(),
        email_gateway=get_email_gateway(),
        frontend_url=settings.frontend_url,
    )


@lru_cache
def get_shop_service() -> ShopService:
    """Get Shop service instance."""
    return ShopService(get_uow_factory())


@lru_cache
def get_employee_service() -> EmployeeService:
    """Get Employee service instance."""
    return EmployeeService(get_uow_factory())


@lru_cache
def get_grooming_type_service() -> GroomingTypeService:
    """Get GroomingType service instance."""
    return GroomingTypeService(get_uow_factory())


@lru_cache
def get_dog_service() -> DogService:
    """Get Dog service instance."""
    return DogService(get_uow_factory())


@lru_cache
def get_appointment_service() -> AppointmentService:
    """Get Appointment service instance."""
    return AppointmentService(get_uow_factory())


@lru_cache
def get_revenue_service() -> RevenueService:
    """Get Revenue service instance."""
    return RevenueService(get_uow_factory())


@lru_cache
def get_auth_service() -> AuthService:
    """Get Auth service instance."""
    return AuthService(get_uow_factory(), auth_provider=get_auth_provider())
