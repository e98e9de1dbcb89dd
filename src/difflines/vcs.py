"""Version control system operations for the difflines tool."""

import logging
import os
import re
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from .config import SectionConfig
from .diffpack import Hunk, PatchParser
from .errors import (
    DiffError,
    GitUnavailableError,
    GitVersionUnsupportedError,
    ReferenceNotFoundError,
    RepositoryNotFoundError,
    TreePeelError,
)

logger = logging.getLogger(__name__)

MINIMUM_GIT_VERSION = (2, 20)


class DeltaStatus(Enum):
    """Change classification of a single file."""

    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    TYPE_CHANGED = "T"
    UNMERGED = "U"
    UNMODIFIED = " "
    UNKNOWN = "X"

    @classmethod
    def from_letter(cls, letter: str) -> "DeltaStatus":
        """Map a git --name-status letter to a status."""
        for status in cls:
            if status.value == letter:
                return status
        return cls.UNKNOWN


@dataclass(frozen=True)
class Snapshot:
    """An immutable handle to the tree a reference resolved to."""

    reference: str
    commit_id: str
    tree_id: str
    repo_root: Path


@dataclass
class FileDelta:
    """Represents a file change between a snapshot and the working state."""

    status: DeltaStatus
    path_old: Optional[str]
    path_new: Optional[str]
    hunks: List[Hunk] = field(default_factory=list)


@dataclass
class ChangeSet:
    """Per-file deltas in git's enumeration order."""

    snapshot: Snapshot
    deltas: List[FileDelta] = field(default_factory=list)

    def __iter__(self) -> Iterator[FileDelta]:
        return iter(self.deltas)

    def __len__(self) -> int:
        return len(self.deltas)


class GitRepository:
    """Read-only git repository operations scoped to a single call."""

    def __init__(self, location: Union[str, Path], config: Optional[SectionConfig] = None):
        """Initialize with a path inside the repository."""
        self.location = Path(location)
        self.config = config or SectionConfig()
        self.root: Optional[Path] = None
        self._git_version: Optional[str] = None

    def __enter__(self) -> "GitRepository":
        """Context manager entry: locate the repository."""
        self.discover()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit: drop the repository handle."""
        self.root = None

    def _run_git(
        self,
        args: List[str],
        cwd: Optional[Path] = None,
    ) -> subprocess.CompletedProcess:
        """Run git command with a deterministic environment."""
        cmd = [
            self.config.git_executable,
            "-c",
            "core.quotePath=false",
            "-c",
            "color.ui=false",
        ] + args
        try:
            return subprocess.run(
                cmd,
                cwd=cwd or self.root or self.location,
                env=self.config.git_env,
                check=False,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="surrogateescape",
            )
        except FileNotFoundError as e:
            raise GitUnavailableError(self.config.git_executable, str(e)) from e

    def validate_git_version(self) -> str:
        """Validate Git version meets minimum requirements."""
        if self._git_version:
            return self._git_version

        required = ".".join(str(part) for part in MINIMUM_GIT_VERSION)
        try:
            result = subprocess.run(
                [self.config.git_executable, "--version"],
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise GitUnavailableError(self.config.git_executable, str(e)) from e
        except subprocess.CalledProcessError as e:
            raise GitVersionUnsupportedError("unavailable", required) from e

        # Extract version number from "git version 2.34.1"
        match = re.search(r"git version (\d+)\.(\d+)(?:\.(\d+))?", result.stdout)
        if not match:
            raise GitVersionUnsupportedError("unknown", required)

        version_str = ".".join(part for part in match.groups() if part is not None)
        if (int(match.group(1)), int(match.group(2))) < MINIMUM_GIT_VERSION:
            raise GitVersionUnsupportedError(version_str, required)

        self._git_version = version_str
        return version_str

    def discover(self) -> Path:
        """Find the work tree root at or above the configured location."""
        self.validate_git_version()

        start = self.location
        if start.is_file():
            start = start.parent
        if not start.is_dir():
            raise RepositoryNotFoundError(str(self.location), "path does not exist")

        result = self._run_git(["rev-parse", "--show-toplevel"], cwd=start)
        top_level = result.stdout.strip()
        if result.returncode != 0 or not top_level:
            raise RepositoryNotFoundError(
                str(self.location), result.stderr.strip() or "no work tree"
            )

        self.root = Path(top_level)
        logger.debug(
            "Discovered repository",
            extra={"location": str(self.location), "root": str(self.root)},
        )
        return self.root

    def resolve(self, reference: str) -> Snapshot:
        """Resolve a reference to the tree it points at."""
        if self.root is None:
            self.discover()

        if not reference or reference.startswith("-"):
            raise ReferenceNotFoundError(reference, "not a valid revision expression")

        object_id = self._rev_parse(reference)
        if object_id is None:
            raise ReferenceNotFoundError(reference, "unknown revision")

        tree_id = self._rev_parse(f"{object_id}^{{tree}}")
        if tree_id is None:
            raise TreePeelError(reference, object_id)

        # Trees reached directly carry no commit
        commit_id = self._rev_parse(f"{object_id}^{{commit}}") or ""

        snapshot = Snapshot(
            reference=reference,
            commit_id=commit_id,
            tree_id=tree_id,
            repo_root=self.root,
        )
        logger.debug(
            "Resolved reference",
            extra={"reference": reference, "commit": commit_id, "tree": tree_id},
        )
        return snapshot

    def _rev_parse(self, expression: str) -> Optional[str]:
        """Return the object id an expression names, or None."""
        result = self._run_git(["rev-parse", "--verify", "--quiet", expression])
        object_id = result.stdout.strip()
        if result.returncode != 0 or not object_id:
            return None
        return object_id

    def diff_to_workdir(self, snapshot: Snapshot) -> ChangeSet:
        """Compare a snapshot against the working tree, staged changes included."""
        deltas = self._get_deltas(snapshot)
        hunks_by_path = self._get_hunks(snapshot)

        for delta in deltas:
            if delta.path_new is not None and delta.status is not DeltaStatus.DELETED:
                delta.hunks = list(hunks_by_path.get(delta.path_new, []))

        logger.debug(
            "Computed change set",
            extra={"tree": snapshot.tree_id, "deltas": len(deltas)},
        )
        return ChangeSet(snapshot=snapshot, deltas=deltas)

    def _diff_args(self) -> List[str]:
        # Explicit options override diff.* settings from the repository config
        return [
            "diff",
            "--inter-hunk-context=0",
            f"-O{os.devnull}",
            "--indent-heuristic",
            "--no-renames",
            "--no-ext-diff",
            "--no-textconv",
            "--no-color",
            "--ignore-submodules=none",
            f"--diff-algorithm={self.config.diff_algorithm}",
        ]

    def _get_deltas(self, snapshot: Snapshot) -> List[FileDelta]:
        """List file deltas with their status, in git's path order."""
        args = self._diff_args() + ["--name-status", "-z", snapshot.tree_id, "--"]
        result = self._run_git(args)
        if result.returncode != 0:
            raise DiffError(str(self.root), result.stderr.strip() or "git diff failed")

        return self._parse_name_status(result.stdout)

    def _parse_name_status(self, output: str) -> List[FileDelta]:
        """Parse NUL-separated --name-status output."""
        fields = output.split("\0")
        if fields and fields[-1] == "":
            fields.pop()

        deltas = []
        i = 0
        while i < len(fields):
            status = DeltaStatus.from_letter(fields[i][:1])
            if status in (DeltaStatus.RENAMED, DeltaStatus.COPIED):
                path_old, path_new = fields[i + 1], fields[i + 2]
                i += 3
            else:
                path_old = path_new = fields[i + 1]
                i += 2

            if status is DeltaStatus.ADDED:
                path_old = None
            elif status is DeltaStatus.DELETED:
                path_new = None

            deltas.append(FileDelta(status=status, path_old=path_old, path_new=path_new))

        return deltas

    def _get_hunks(self, snapshot: Snapshot) -> Dict[str, List[Hunk]]:
        """Compute the zero-context patch and group its hunks by path."""
        args = self._diff_args() + [
            "--unified=0",
            "--src-prefix=a/",
            "--dst-prefix=b/",
            snapshot.tree_id,
            "--",
        ]
        result = self._run_git(args)
        if result.returncode != 0:
            raise DiffError(str(self.root), result.stderr.strip() or "git diff failed")

        return PatchParser(dst_prefix="b/").parse(result.stdout)
