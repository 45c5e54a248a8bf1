from fastapi import APIRouter

from app.api.health import router as health_router
from app.api.products import router as products_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(products_router)
