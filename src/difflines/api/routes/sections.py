"""Section routes for the difflines API."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from ..models import SectionsRequest
from ..service import SectionService

router = APIRouter(tags=["sections"])

logger = logging.getLogger(__name__)

section_service = SectionService()


@router.post("/sections")
def create_sections(request: SectionsRequest) -> Dict[str, Any]:
    """List the changed line ranges of a working tree relative to a reference."""
    logger.info(
        "Received sections request",
        extra={"repo": request.repo_path, "reference": request.reference},
    )

    try:
        return section_service.process_sections_request(
            repo_path=request.repo_path,
            reference=request.reference,
            extension=request.extension,
            diff_algorithm=request.diff_algorithm,
        )

    except Exception as exc:
        logger.exception("Sections request failed", extra={"repo": request.repo_path})
        raise HTTPException(
            status_code=500,
            detail={
                "ok": False,
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": f"Failed to compute sections: {str(exc)}",
                    "details": {"exception_type": type(exc).__name__},
                },
            },
        ) from exc
