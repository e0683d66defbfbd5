"""
Top-level API router.

Aggregates the domain routers under their prefixes.  The application
mounts this router under ``/api``.
"""

from fastapi import APIRouter

from .endpoints import turismo

router = APIRouter()

router.include_router(turismo.router, prefix="/turismo", tags=["turismo"])
