"""
Top-level router for version 1 of the API.

This router aggregates the domain routers (users, authorities, scopes)
under a unified prefix.  When a new domain is introduced, include its
router here.
"""

from fastapi import APIRouter

from .endpoints import authorities, scopes, users


router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(authorities.router, prefix="/authorities", tags=["authorities"])
router.include_router(scopes.router, prefix="/scopes", tags=["scopes"])
