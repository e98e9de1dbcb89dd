"""API route registration for difflines."""

from fastapi import APIRouter

from . import meta, sections

router = APIRouter()
router.include_router(meta.router)
router.include_router(sections.router)

__all__ = ["router"]
