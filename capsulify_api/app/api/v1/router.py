"""
Top-level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new domains are introduced, update this file to include them.
"""

from fastapi import APIRouter

from .endpoints import combinations, users

router = APIRouter()

router.include_router(combinations.router, prefix="/combinations", tags=["combinations"])
router.include_router(users.router, prefix="/users", tags=["users"])
