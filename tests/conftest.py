"""Pytest configuration and fixtures for difflines tests."""

import os
import subprocess
from pathlib import Path
from typing import Optional

import pytest

from difflines.config import SectionConfig

FOO_OLD = """fn main() {
    let a = 1;
    let b = 2;
    let c = 3;
    let d = 4;
    let e = 5;
    println!("{}", a + b + c + d + e);
}
"""

FOO_NEW = """fn main() {
    let a = 1;
    let b = 20;
    let c = 3;
    let d = 4;
    let e = 50;
    println!("{}", a + b + c + d + e);
}
"""

BAR_OLD = """use std::io;

fn bar() -> u32 {
    let x = 1;
    x
}
"""

BAR_NEW = """use std::fmt;

fn bar() -> u32 {
    let x = 1;
    let y = 2;
    let z = 3;
    let w = 4;
    x + y + z + w
}
"""


class GitRepoHelper:
    """Helper class for git repository operations in tests."""

    def __init__(self, repo_path: Path):
        self.repo_path = repo_path
        self.env = os.environ.copy()
        self.env.update({
            "GIT_AUTHOR_NAME": "Test User",
            "GIT_AUTHOR_EMAIL": "test@example.com",
            "GIT_COMMITTER_NAME": "Test User",
            "GIT_COMMITTER_EMAIL": "test@example.com",
            "GIT_CONFIG_GLOBAL": os.devnull,
            "GIT_CONFIG_NOSYSTEM": "1",
        })

    def run_git(self, args: list[str]) -> subprocess.CompletedProcess:
        """Run git command in the repository."""
        return subprocess.run(
            ["git"] + args,
            cwd=self.repo_path,
            env=self.env,
            check=True,
            capture_output=True,
            text=True,
        )

    def init(self) -> "GitRepoHelper":
        """Initialize a repository on 'master' with one empty commit."""
        self.run_git(["init"])
        self.run_git(["symbolic-ref", "HEAD", "refs/heads/master"])
        self.run_git(["config", "user.name", "Test User"])
        self.run_git(["config", "user.email", "test@example.com"])
        self.run_git(["commit", "--allow-empty", "-m", "initial"])
        return self

    def write(self, path: str, content: str) -> "GitRepoHelper":
        """Create or overwrite a file with content."""
        file_path = self.repo_path / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)
        return self

    def write_bytes(self, path: str, content: bytes) -> "GitRepoHelper":
        """Create or overwrite a file with raw bytes."""
        file_path = self.repo_path / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(content)
        return self

    def delete(self, path: str) -> "GitRepoHelper":
        """Delete a file from the working tree only."""
        (self.repo_path / path).unlink()
        return self

    def stage(self, *paths: str) -> "GitRepoHelper":
        """Add paths to the index."""
        self.run_git(["add", "--"] + list(paths))
        return self

    def commit(self, message: str = "some commit", branch: Optional[str] = None) -> str:
        """Commit the index and return the commit SHA.

        With ``branch``, the index tree is committed onto that branch with the
        current HEAD as parent, leaving HEAD and the working tree untouched.
        """
        if branch is None:
            self.run_git(["commit", "-m", message])
            return self.get_current_sha()

        tree = self.run_git(["write-tree"]).stdout.strip()
        sha = self.run_git(["commit-tree", tree, "-p", "HEAD", "-m", message]).stdout.strip()
        self.run_git(["update-ref", f"refs/heads/{branch}", sha])
        return sha

    def branch(self, name: str) -> "GitRepoHelper":
        """Create a branch at HEAD without switching to it."""
        self.run_git(["branch", name])
        return self

    def get_current_sha(self) -> str:
        """Get current commit SHA."""
        return self.run_git(["rev-parse", "HEAD"]).stdout.strip()


@pytest.fixture
def git_helper(tmp_path: Path) -> GitRepoHelper:
    """Create a repository on 'master' holding a single empty commit."""
    repo_path = tmp_path / "test_repo"
    repo_path.mkdir()
    return GitRepoHelper(repo_path).init()


@pytest.fixture
def rs_config() -> SectionConfig:
    """Configuration reporting Rust sources."""
    return SectionConfig(extension=".rs")
