"""Configuration management for the difflines tool."""

import os
from dataclasses import dataclass
from typing import Any, Dict

DIFF_ALGORITHMS = ("myers", "minimal", "patience", "histogram")

# Variables that point git at another repository or inject caller options;
# git exports several of them while running hooks
INHERITED_GIT_VARIABLES = (
    "GIT_DIR",
    "GIT_WORK_TREE",
    "GIT_INDEX_FILE",
    "GIT_OBJECT_DIRECTORY",
    "GIT_ALTERNATE_OBJECT_DIRECTORIES",
    "GIT_COMMON_DIR",
    "GIT_NAMESPACE",
    "GIT_PREFIX",
    "GIT_CEILING_DIRECTORIES",
    "GIT_DISCOVERY_ACROSS_FILESYSTEM",
    "GIT_CONFIG",
    "GIT_CONFIG_PARAMETERS",
    "GIT_CONFIG_COUNT",
    "GIT_DIFF_OPTS",
    "GIT_EXTERNAL_DIFF",
)


@dataclass(frozen=True)
class SectionConfig:
    """Configuration for section extraction."""

    # Only files whose post-change path ends with this suffix are reported
    extension: str = ".py"

    diff_algorithm: str = "myers"
    git_executable: str = "git"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.extension.startswith("."):
            raise ValueError("extension must start with '.'")
        if len(self.extension) < 2:
            raise ValueError("extension must not be a bare '.'")
        if self.diff_algorithm not in DIFF_ALGORITHMS:
            raise ValueError(
                f"diff_algorithm must be one of: {', '.join(DIFF_ALGORITHMS)}"
            )
        if not self.git_executable:
            raise ValueError("git_executable cannot be empty")

    @property
    def git_env(self) -> Dict[str, str]:
        """Get Git environment variables for deterministic, read-only output."""
        env = {
            key: value
            for key, value in os.environ.items()
            if key not in INHERITED_GIT_VARIABLES
            and not key.startswith(("GIT_CONFIG_KEY_", "GIT_CONFIG_VALUE_"))
        }

        null_device = "NUL" if os.name == "nt" else "/dev/null"

        env.update(
            {
                "LC_ALL": "C",
                "GIT_CONFIG_GLOBAL": null_device,
                "GIT_CONFIG_SYSTEM": null_device,
                "GIT_TERMINAL_PROMPT": "0",
                "GIT_OPTIONAL_LOCKS": "0",
                "GIT_ASKPASS": "echo",
                "SSH_ASKPASS": "echo",
            }
        )
        return env

    def to_provenance_dict(self) -> Dict[str, Any]:
        """Convert config to provenance dictionary for output."""
        return {
            "extension": self.extension,
            "context_lines": 0,
            "diff_algorithm": self.diff_algorithm,
            "rename_detection": {"enabled": False},
            "env_locks": {
                "LC_ALL": "C",
                "color": "off",
                "core.quotePath": "false",
                "optional_locks": "off",
            },
        }
