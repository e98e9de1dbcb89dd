"""Main CLI entry point for the difflines tool."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DIFF_ALGORITHMS, SectionConfig
from .errors import DiffLinesError
from .logging_utils import configure_logging
from .sections import collect_sections
from .serialize import DeterministicSerializer
from .settings import get_default_extension, get_git_executable

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="difflines",
        description="Report the line ranges changed in a working tree relative to a revision",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  difflines --ref main
  difflines --repo /path/to/checkout --ref origin/main --ext .rs --format text
  difflines --ref HEAD~3 --json sections.json
        """,
    )

    parser.add_argument(
        "--ref",
        required=True,
        help="Reference to compare the working tree against (branch, tag, commit)",
    )
    parser.add_argument(
        "--repo",
        default=".",
        help="Any path inside the repository (default: current directory)",
    )
    parser.add_argument(
        "--ext",
        default=None,
        help="File extension to report, including the dot "
        "(default: $DIFFLINES_EXTENSION or .py)",
    )
    parser.add_argument(
        "--diff-algorithm",
        default="myers",
        choices=DIFF_ALGORITHMS,
        help="Diff algorithm used to compute hunks (default: myers)",
    )
    parser.add_argument(
        "--format",
        default="json",
        choices=["json", "text"],
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--json",
        help="Write output to file instead of stdout",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )

    return parser


def create_config(args: argparse.Namespace) -> SectionConfig:
    """Create configuration from command line arguments."""
    return SectionConfig(
        extension=args.ext or get_default_extension(),
        diff_algorithm=args.diff_algorithm,
        git_executable=get_git_executable(),
    )


def process_sections(
    config: SectionConfig, repository_location: str, reference: str
) -> Dict[str, Any]:
    """Compute sections and return the serialized payload."""
    report = collect_sections(repository_location, reference, config)
    logger.info(
        "Sections extracted",
        extra={
            "reference": reference,
            "deltas": report.delta_count,
            "sections": len(report.sections),
        },
    )

    serializer = DeterministicSerializer(config)
    return serializer.serialize_output(
        report.sections, report.snapshot, report.git_version
    )


def output_result(result: str, output_path: Optional[str]) -> None:
    """Output result to stdout or file."""
    if output_path:
        Path(output_path).write_text(result + "\n", encoding="utf-8")
    else:
        print(result)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    serializer = DeterministicSerializer()

    try:
        config = create_config(args)
        serializer = DeterministicSerializer(config)

        payload = process_sections(config, args.repo, args.ref)

        if args.format == "text":
            output_result(serializer.to_text(payload), args.json)
        else:
            result = serializer.create_success_envelope(payload)
            output_result(serializer.to_json_string(result), args.json)

        return 0

    except ValueError as e:
        result = serializer.create_error_envelope("CONFIG_INVALID", str(e))
        output_result(serializer.to_json_string(result), args.json)
        return 1

    except DiffLinesError as e:
        logger.warning("Section extraction failed", extra={"code": e.code})
        result = serializer.create_error_envelope(e.code, e.message, e.details)
        output_result(serializer.to_json_string(result), args.json)
        return 1

    except Exception as e:
        logger.exception("Unexpected error during section extraction")
        result = serializer.create_error_envelope(
            "INTERNAL_ERROR",
            f"Internal error: {str(e)}",
            {"type": type(e).__name__},
        )
        output_result(serializer.to_json_string(result), args.json)
        return 1


if __name__ == "__main__":
    sys.exit(main())
