"""
Main API router that includes all endpoint routers
"""

from fastapi import APIRouter

from pbi_access.api.endpoints import access, groups, users

# Create main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(access.router, tags=["access"])
api_router.include_router(groups.router, prefix="/groups", tags=["groups"])
