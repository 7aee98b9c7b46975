"""API router configuration.

This module configures the main API router and includes all endpoint routers
for different features of the application.
"""

from fastapi import APIRouter

from app.api.endpoints import auth, health, users

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
