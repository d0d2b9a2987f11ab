"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from svglayout.api import debug, health, render, validate

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(validate.router)
api_router.include_router(render.router)
api_router.include_router(debug.router)
