from fastapi import APIRouter

from app.swpshop.routers.health import router as health_router
from app.swpshop.routers.products import router as products_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(products_router, tags=["products"])
