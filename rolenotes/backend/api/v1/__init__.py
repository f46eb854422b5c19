"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from rolenotes.backend.api.v1.endpoints import notes

router = APIRouter()

router.include_router(notes.router, prefix="/notes", tags=["notes"])
