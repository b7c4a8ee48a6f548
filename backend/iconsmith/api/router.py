"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from iconsmith.api import colors, health, icons, variants

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(icons.router)
api_router.include_router(colors.router)
api_router.include_router(variants.router)
