"""Changed-line section extraction for the difflines tool."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .config import SectionConfig
from .policies import SectionPolicies
from .vcs import ChangeSet, GitRepository, Snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Section:
    """A changed line range in one file of the working state.

    ``line_start`` is 1-based and ``line_end`` is exclusive, so a hunk that
    touches a single line gives ``line_end == line_start + 1``.
    """

    file_name: str
    line_start: int
    line_end: int


def extract_sections(change_set: ChangeSet, extension: str) -> List[Section]:
    """Convert the hunks of added and modified files into sections.

    Deltas are visited in the order the change set holds them and hunks in
    the order the diff produced them; nothing is merged or re-sorted.
    """
    sections = []

    for delta in change_set:
        if not SectionPolicies.should_report(delta, extension):
            logger.debug(
                "Skipping delta",
                extra={"status": delta.status.name, "path": delta.path_new or delta.path_old},
            )
            continue

        for hunk in delta.hunks:
            sections.append(
                Section(
                    file_name=delta.path_new,
                    line_start=hunk.new_start,
                    line_end=hunk.new_start + hunk.new_lines,
                )
            )

    return sections


@dataclass(frozen=True)
class SectionReport:
    """Sections together with the snapshot and git version that produced them."""

    snapshot: Snapshot
    git_version: str
    sections: List[Section]
    delta_count: int = 0


def collect_sections(
    repository_location: Union[str, Path],
    reference: str,
    config: Optional[SectionConfig] = None,
) -> SectionReport:
    """Run discovery, resolution, diff and extraction in one repository session."""
    config = config or SectionConfig()

    with GitRepository(repository_location, config) as repo:
        git_version = repo.validate_git_version()
        snapshot = repo.resolve(reference)
        change_set = repo.diff_to_workdir(snapshot)

    sections = extract_sections(change_set, config.extension)
    logger.debug(
        "Extracted sections",
        extra={
            "reference": reference,
            "deltas": len(change_set),
            "sections": len(sections),
        },
    )
    return SectionReport(
        snapshot=snapshot,
        git_version=git_version,
        sections=sections,
        delta_count=len(change_set),
    )


def get_sections(
    repository_location: Union[str, Path],
    reference: str,
    config: Optional[SectionConfig] = None,
) -> List[Section]:
    """Return the sections changed in the working state relative to a reference.

    Args:
        repository_location: Any path inside the repository work tree.
        reference: Revision expression to compare against (branch, tag, commit id).
        config: Extraction configuration; defaults to ``SectionConfig()``.

    Returns:
        Sections ordered by file path, then by line within each file.

    Raises:
        RevisionError: If the repository or the reference cannot be resolved.
        DiffError: If the comparison cannot be computed.
    """
    return collect_sections(repository_location, reference, config).sections
