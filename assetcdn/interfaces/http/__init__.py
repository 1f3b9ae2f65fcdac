from fastapi import APIRouter

from assetcdn.interfaces.http.routers import assets, health


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(assets.router, prefix="/assets", tags=["assets"])
    router.include_router(health.router, tags=["health"])
    return router


__all__ = [
    "create_api_router",
]
