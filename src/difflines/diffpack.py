"""Zero-context patch parsing for the difflines tool."""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

_C_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    '"': 0x22,
    "\\": 0x5C,
}


@dataclass(frozen=True)
class Hunk:
    """A single hunk header: a changed span on each side of the comparison."""

    old_start: int
    old_lines: int
    new_start: int
    new_lines: int


def unquote_path(value: str) -> str:
    """Undo git's C-style quoting of a path, if present."""
    if len(value) < 2 or not (value.startswith('"') and value.endswith('"')):
        return value

    body = value[1:-1]
    raw = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char != "\\":
            raw.extend(char.encode("utf-8", errors="surrogateescape"))
            i += 1
            continue

        escape = body[i + 1 : i + 2]
        if escape in _C_ESCAPES:
            raw.append(_C_ESCAPES[escape])
            i += 2
        elif re.match(r"[0-7]{3}", body[i + 1 : i + 4]):
            raw.append(int(body[i + 1 : i + 4], 8))
            i += 4
        else:
            raw.extend(b"\\")
            i += 1

    return raw.decode("utf-8", errors="surrogateescape")


class PatchParser:
    """Splits unified patch text into hunks grouped by post-change path."""

    def __init__(self, dst_prefix: str = "b/"):
        """Initialize patch parser."""
        self.dst_prefix = dst_prefix
        self.hunk_header_pattern = re.compile(
            r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@"
        )

    def parse(self, patch: str) -> Dict[str, List[Hunk]]:
        """Parse a patch into an ordered mapping of post-change path to hunks.

        Files without a post-change side (deletions) are not included. Files
        with a post-change side but no hunks (binary or mode-only changes) map
        to an empty list.
        """
        hunks_by_path: Dict[str, List[Hunk]] = {}
        current_path: Optional[str] = None
        in_header = False

        for line in patch.split("\n"):
            if line.startswith("diff --git "):
                current_path = None
                in_header = True
            elif in_header and line.startswith("+++ "):
                current_path = self._parse_target_path(line[4:])
                if current_path is not None:
                    hunks_by_path.setdefault(current_path, [])
            elif line.startswith("@@"):
                in_header = False
                header_match = self.hunk_header_pattern.match(line)
                if header_match and current_path is not None:
                    hunks_by_path[current_path].append(self._create_hunk(header_match))

        logger.debug(
            "Parsed patch",
            extra={
                "files": len(hunks_by_path),
                "hunks": sum(len(hunks) for hunks in hunks_by_path.values()),
            },
        )
        return hunks_by_path

    def _parse_target_path(self, value: str) -> Optional[str]:
        """Extract the post-change path from a '+++' header value."""
        # git appends a tab to names containing spaces; real tabs are quoted
        value = value.rstrip("\t")
        if value == "/dev/null":
            return None

        path = unquote_path(value)
        if path.startswith(self.dst_prefix):
            path = path[len(self.dst_prefix) :]
        return path

    def _create_hunk(self, header_match: re.Match) -> Hunk:
        """Create a Hunk from a matched header."""
        return Hunk(
            old_start=int(header_match.group(1)),
            old_lines=int(header_match.group(2) or "1"),
            new_start=int(header_match.group(3)),
            new_lines=int(header_match.group(4) or "1"),
        )
