"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.appointments import appointments_router, shop_appointments_router
from api.v1.routes.auth import router as auth_router
from api.v1.routes.dogs import dogs_router, shop_dogs_router
from api.v1.routes.employees import employees_router, shop_employees_router
from api.v1.routes.grooming_types import router as grooming_types_router
from api.v1.routes.invitations import router as invitations_router
from api.v1.routes.revenue import router as revenue_router
from api.v1.routes.shops import router as shops_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(shops_router)
router.include_router(grooming_types_router)
router.include_router(shop_employees_router)
router.include_router(employees_router)
router.include_router(invitations_router)
router.include_router(shop_dogs_router)
router.include_router(dogs_router)
router.include_router(shop_appointments_router)
router.include_router(appointments_router)
router.include_router(revenue_router)
