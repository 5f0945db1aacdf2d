from __future__ import annotations

from fastapi import APIRouter

from api.routes import health, strategy


def get_api_router() -> APIRouter:
    router = APIRouter()

    router.include_router(health.router, tags=["health"])
    router.include_router(strategy.router, tags=["strategy"])

    return router
