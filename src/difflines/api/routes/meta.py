"""Meta endpoints for the difflines API."""

import logging
from typing import Optional

from fastapi import APIRouter

from ...config import SectionConfig
from ...errors import DiffLinesError
from ...settings import get_git_executable
from ...vcs import GitRepository
from .. import __version__
from ..models import HealthResponse, VersionResponse

router = APIRouter(tags=["meta"])

logger = logging.getLogger(__name__)


def _get_git_version() -> Optional[str]:
    """Return the configured git version if it is usable."""
    repo = GitRepository(".", SectionConfig(git_executable=get_git_executable()))
    try:
        return repo.validate_git_version()
    except DiffLinesError as exc:
        logger.debug("git version check failed", extra={"code": exc.code})
        return None


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    git_version = _get_git_version()
    logger.info("Health check invoked", extra={"git_version": git_version})
    return HealthResponse(
        status="healthy" if git_version else "degraded",
        version=__version__,
        git_available=git_version is not None,
        git_version=git_version,
    )


@router.get("/version", response_model=VersionResponse)
def version_info() -> VersionResponse:
    """Version information endpoint."""
    return VersionResponse(
        version=__version__,
        api_version="v1",
        git_version=_get_git_version(),
    )


@router.get("/", include_in_schema=False)
def root() -> dict:
    """Root endpoint providing basic API metadata."""
    return {
        "name": "difflines API",
        "version": __version__,
        "description": "Changed-line sections of a working tree relative to a revision",
        "endpoints": {
            "sections": "POST /sections - List changed line ranges",
            "health": "GET /health - Health check",
            "version": "GET /version - Version information",
            "docs": "GET /docs - API documentation",
        },
    }
