"""Service layer for the difflines API."""

import logging
from typing import Any, Dict, Optional

from ..config import SectionConfig
from ..errors import DiffLinesError
from ..main import process_sections
from ..serialize import DeterministicSerializer
from ..settings import get_default_extension, get_git_executable

logger = logging.getLogger(__name__)


class SectionService:
    """Service class that wraps section extraction in response envelopes."""

    def process_sections_request(
        self,
        repo_path: str,
        reference: str,
        extension: Optional[str] = None,
        diff_algorithm: str = "myers",
    ) -> Dict[str, Any]:
        """Process a sections request and return the complete JSON response."""
        logger.info(
            "Processing sections request",
            extra={"repo": repo_path, "reference": reference},
        )

        try:
            config = SectionConfig(
                extension=extension or get_default_extension(),
                diff_algorithm=diff_algorithm,
                git_executable=get_git_executable(),
            )
            payload = process_sections(config, repo_path, reference)

            serializer = DeterministicSerializer(config)
            result = serializer.create_success_envelope(payload)

            logger.info(
                "Sections request succeeded",
                extra={"repo": repo_path, "sections": len(payload["sections"])},
            )
            return result

        except DiffLinesError as exc:
            logger.warning(
                "Known difflines error",
                extra={"repo": repo_path, "code": exc.code},
            )
            serializer = DeterministicSerializer()
            return serializer.create_error_envelope(exc.code, exc.message, exc.details)
