from fastapi import APIRouter

from initializr.api.routes_generate import router as generate_router
from initializr.api.routes_health import router as health_router
from initializr.api.routes_packages import router as packages_router
from initializr.api.routes_pages import router as pages_router

router = APIRouter()
router.include_router(pages_router, tags=["pages"])
router.include_router(generate_router, tags=["generate"])
router.include_router(packages_router, tags=["packages"])
router.include_router(health_router, tags=["health"])
