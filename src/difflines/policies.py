"""Delta filtering policies for the difflines tool."""

from typing import FrozenSet

from .vcs import DeltaStatus, FileDelta


class SectionPolicies:
    """Policies deciding which deltas contribute sections."""

    # Renames, copies and type changes are not continuations of a file
    REPORTABLE_STATUSES: FrozenSet[DeltaStatus] = frozenset(
        {DeltaStatus.ADDED, DeltaStatus.MODIFIED}
    )

    @classmethod
    def is_reportable_status(cls, status: DeltaStatus) -> bool:
        """Check if a delta status can contribute sections."""
        return status in cls.REPORTABLE_STATUSES

    @classmethod
    def matches_extension(cls, file_path: str, extension: str) -> bool:
        """Check if a path ends with the extension, as a literal suffix."""
        return file_path.endswith(extension)

    @classmethod
    def should_report(cls, delta: FileDelta, extension: str) -> bool:
        """Check if a delta's hunks should be emitted as sections."""
        return (
            cls.is_reportable_status(delta.status)
            and delta.path_new is not None
            and cls.matches_extension(delta.path_new, extension)
        )
