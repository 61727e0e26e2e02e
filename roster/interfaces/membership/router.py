"""
Aggregate router for the membership bounded context.

Mounts the per-entity routers under a single APIRouter.
"""

from fastapi import APIRouter

from roster.interfaces.membership.auth_users import router as auth_users_router
from roster.interfaces.membership.members import router as members_router
from roster.interfaces.membership.teams import router as teams_router
from roster.interfaces.membership.users import router as users_router

router = APIRouter()
router.include_router(users_router)
router.include_router(auth_users_router)
router.include_router(teams_router)
router.include_router(members_router)
