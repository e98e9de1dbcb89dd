"""Error definitions and handling for the difflines tool."""

from typing import Any, Dict, Optional


class DiffLinesError(Exception):
    """Base exception for difflines errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with code, message, and optional details."""
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        result = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class GitUnavailableError(DiffLinesError):
    """The git executable could not be started."""

    def __init__(self, executable: str, reason: str):
        super().__init__(
            code="GIT_UNAVAILABLE",
            message=f"Git executable {executable!r} is not available: {reason}",
            details={"executable": executable, "reason": reason},
        )


class GitVersionUnsupportedError(DiffLinesError):
    """Git version is not supported."""

    def __init__(self, detected_version: str, required_version: str = "2.20"):
        super().__init__(
            code="GIT_VERSION_UNSUPPORTED",
            message=f"Git version {detected_version} is not supported. "
            f"Minimum required: {required_version}",
            details={
                "detected_version": detected_version,
                "required_version": required_version,
            },
        )


class RevisionError(DiffLinesError):
    """A repository or revision could not be resolved to a tree."""


class RepositoryNotFoundError(RevisionError):
    """No repository found at or above the given path."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            code="REPOSITORY_NOT_FOUND",
            message=f"No git repository found at or above {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ReferenceNotFoundError(RevisionError):
    """Reference string cannot be parsed or does not name an object."""

    def __init__(self, reference: str, reason: str):
        super().__init__(
            code="REFERENCE_NOT_FOUND",
            message=f"Reference {reference!r} could not be resolved: {reason}",
            details={"reference": reference, "reason": reason},
        )


class TreePeelError(RevisionError):
    """Reference resolves to an object that has no tree."""

    def __init__(self, reference: str, object_id: str):
        super().__init__(
            code="TREE_PEEL_FAILED",
            message=f"Reference {reference!r} ({object_id}) does not point to a tree",
            details={"reference": reference, "object_id": object_id},
        )


class DiffError(DiffLinesError):
    """Comparison between a tree and the working state failed."""

    def __init__(self, repo_root: str, reason: str):
        super().__init__(
            code="DIFF_FAILED",
            message=f"Failed to compute diff: {reason}",
            details={"repo_root": repo_root, "reason": reason},
        )
