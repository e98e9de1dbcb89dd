"""Deterministic serialization for the difflines tool."""

import hashlib
import json
import logging
from typing import Any, Dict, List, Optional

from .config import SectionConfig
from .sections import Section
from .vcs import Snapshot

logger = logging.getLogger(__name__)


class DeterministicSerializer:
    """Handles deterministic JSON serialization with stable key ordering."""

    def __init__(self, config: Optional[SectionConfig] = None):
        """Initialize with configuration."""
        self.config = config or SectionConfig()

    def serialize_output(
        self,
        sections: List[Section],
        snapshot: Snapshot,
        git_version: str,
    ) -> Dict[str, Any]:
        """Serialize sections and their provenance to a dictionary."""
        logger.debug("Serializing output", extra={"sections": len(sections)})

        provenance = self.config.to_provenance_dict()
        provenance.update(
            {
                "reference": snapshot.reference,
                "commit_id": snapshot.commit_id,
                "tree_id": snapshot.tree_id,
                "repo_root": str(snapshot.repo_root),
                "git_version": git_version,
            }
        )

        # Extraction order is already path then line; keep it as produced
        payload = {
            "provenance": provenance,
            "sections": [self._serialize_section(section) for section in sections],
        }

        checksum = self._compute_checksum(payload)
        payload["provenance"]["checksum"] = checksum

        logger.debug("Serialization finished", extra={"checksum": checksum})
        return payload

    def _serialize_section(self, section: Section) -> Dict[str, Any]:
        """Serialize a single section to dictionary."""
        return {
            "file_name": section.file_name,
            "line_start": section.line_start,
            "line_end": section.line_end,
        }

    def _compute_checksum(self, payload: Dict[str, Any]) -> str:
        """Compute SHA-256 checksum of the payload, excluding the checksum itself."""
        provenance = {
            key: value
            for key, value in payload["provenance"].items()
            if key != "checksum"
        }
        payload_copy = dict(payload, provenance=provenance)
        checksum = hashlib.sha256(self._to_deterministic_json_bytes(payload_copy)).hexdigest()
        logger.debug("Computed payload checksum", extra={"checksum": checksum})
        return checksum

    def _to_deterministic_json_bytes(self, obj: Any) -> bytes:
        """Convert object to deterministic JSON bytes."""
        json_str = json.dumps(
            obj,
            ensure_ascii=False,
            sort_keys=True,
            separators=(",", ":"),
            indent=None,
        )
        return json_str.encode("utf-8", errors="replace")

    def to_json_string(self, payload: Dict[str, Any]) -> str:
        """Convert payload to pretty-printed JSON string."""
        return json.dumps(
            payload,
            ensure_ascii=False,
            sort_keys=True,
            indent=2,
        )

    def to_text(self, payload: Dict[str, Any]) -> str:
        """Render serialized sections as one 'path:start-end' line each."""
        return "\n".join(
            f"{section['file_name']}:{section['line_start']}-{section['line_end']}"
            for section in payload["sections"]
        )

    def create_success_envelope(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create success envelope around payload."""
        return {"ok": True, "data": payload}

    def create_error_envelope(
        self, error_code: str, error_message: str, details: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Create error envelope."""
        logger.debug("Creating error envelope", extra={"code": error_code})
        error_data = {
            "code": error_code,
            "message": error_message,
        }
        if details:
            error_data["details"] = details

        return {"ok": False, "error": error_data}
