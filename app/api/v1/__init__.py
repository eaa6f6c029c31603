"""Version 1 router: health, identity (/auth) and the ownership-scoped catalog."""

from fastapi import APIRouter

from app.api.v1 import auth, brands, health, products

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(brands.router, prefix="/brands", tags=["brands"])
router.include_router(products.router, prefix="/products", tags=["products"])
