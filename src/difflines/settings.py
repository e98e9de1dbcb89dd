"""Application-wide settings and environment loading."""

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()
logger.debug("Environment variables loaded from .env if present")

DEFAULT_EXTENSION = ".py"
DEFAULT_GIT_EXECUTABLE = "git"


@lru_cache(maxsize=1)
def get_default_extension() -> str:
    """Return the extension filter configured in the environment."""
    extension = os.getenv("DIFFLINES_EXTENSION")
    if extension:
        logger.debug("Extension configured from environment", extra={"extension": extension})
        return extension

    return DEFAULT_EXTENSION


@lru_cache(maxsize=1)
def get_git_executable() -> str:
    """Return the git executable configured in the environment."""
    return os.getenv("DIFFLINES_GIT") or DEFAULT_GIT_EXECUTABLE
