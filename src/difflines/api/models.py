"""Pydantic models for difflines API requests and responses."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..config import DIFF_ALGORITHMS


class SectionsRequest(BaseModel):
    """Request model for the sections endpoint."""

    repo_path: str = Field(
        ...,
        description="Any absolute path inside the repository work tree",
        examples=["/srv/checkouts/project"],
    )
    reference: str = Field(
        ...,
        description="Reference to compare the working tree against",
        examples=["main"],
    )
    extension: Optional[str] = Field(
        None,
        description="File extension to report, including the dot",
        examples=[".py"],
    )
    diff_algorithm: str = Field(
        "myers",
        description="Diff algorithm used to compute hunks",
    )

    @field_validator("repo_path")
    @classmethod
    def repo_path_must_be_absolute(cls, v):
        """Basic validation for the repository path."""
        v = v.strip()
        if not v:
            raise ValueError("repo_path cannot be empty")
        if not (v.startswith("/") or (len(v) > 2 and v[1] == ":")):
            raise ValueError("repo_path must be an absolute path")
        return v

    @field_validator("reference")
    @classmethod
    def reference_must_not_be_empty(cls, v):
        """Reject blank references."""
        v = v.strip()
        if not v:
            raise ValueError("reference cannot be empty")
        return v

    @field_validator("extension")
    @classmethod
    def extension_must_be_dotted(cls, v):
        """Extensions are matched as literal dot-prefixed suffixes."""
        if v is not None and (not v.startswith(".") or len(v) < 2):
            raise ValueError("extension must start with '.' and name a suffix")
        return v

    @field_validator("diff_algorithm")
    @classmethod
    def diff_algorithm_must_be_known(cls, v):
        """Only algorithms git understands are accepted."""
        if v not in DIFF_ALGORITHMS:
            raise ValueError(f"diff_algorithm must be one of: {', '.join(DIFF_ALGORITHMS)}")
        return v


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., examples=["healthy"])
    version: str = Field(..., examples=["1.0.0"])
    git_available: bool = Field(..., examples=[True])
    git_version: Optional[str] = Field(None, examples=["2.39.2"])


class VersionResponse(BaseModel):
    """Response model for version endpoint."""

    version: str = Field(..., examples=["1.0.0"])
    api_version: str = Field(..., examples=["v1"])
    git_version: Optional[str] = Field(None, examples=["2.39.2"])
    supported_features: List[str] = Field(
        default_factory=lambda: [
            "zero_context_hunks",
            "staged_changes",
            "extension_filter",
            "deterministic_output",
        ]
    )
