"""difflines: changed-line sections of a working tree.

Resolves a reference to a tree, diffs it against the working state with
zero context lines, and reports the changed line range of every hunk in
added or modified files of one extension.
"""

__version__ = "1.0.0"

from .config import SectionConfig
from .errors import (
    DiffError,
    DiffLinesError,
    ReferenceNotFoundError,
    RepositoryNotFoundError,
    RevisionError,
    TreePeelError,
)
from .sections import Section, extract_sections, get_sections

__all__ = [
    "DiffError",
    "DiffLinesError",
    "ReferenceNotFoundError",
    "RepositoryNotFoundError",
    "RevisionError",
    "Section",
    "SectionConfig",
    "TreePeelError",
    "extract_sections",
    "get_sections",
]
