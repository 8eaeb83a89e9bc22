"""Module: api."""

# backend/vetclinic/api/v1/api.py
from fastapi import APIRouter

# Core operational routes.
from vetclinic.api.v1.routes.health import router as health_router

# Domain routes used by frontend pages.
from vetclinic.api.v1.routes.owners import router as owners_router
from vetclinic.api.v1.routes.pets import router as pets_router
from vetclinic.api.v1.routes.visits import router as visits_router


api_router = APIRouter()

# Register operational endpoints first for service-level concerns.
api_router.include_router(health_router, prefix="/health", tags=["health"])

# Register business/domain endpoints consumed by the application UI.
api_router.include_router(owners_router, prefix="/owners", tags=["owners"])
api_router.include_router(pets_router, prefix="/pets", tags=["pets"])
api_router.include_router(visits_router, prefix="/visits", tags=["visits"])
