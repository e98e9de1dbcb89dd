"""HTTP API for difflines."""

from .. import __version__

__all__ = ["__version__"]
