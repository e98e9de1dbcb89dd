#!/usr/bin/env python3
"""Startup script for the difflines API server."""

import argparse
import sys
from pathlib import Path

# Add src to path so we can import difflines without installing it
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import uvicorn


def main():
    """Parse server options and run uvicorn."""
    parser = argparse.ArgumentParser(
        description="Start the difflines API server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/start_api.py                  # Local development server
  python scripts/start_api.py --port 9000      # Alternate port
  python scripts/start_api.py --reload         # Auto-reload on changes
        """,
    )
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Log level (default: info)",
    )
    args = parser.parse_args()

    options = {
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
    }
    if args.reload:
        options["reload"] = True
        options["reload_dirs"] = [str(Path(__file__).parent.parent / "src")]

    print(f"Serving difflines API on http://{args.host}:{args.port} (docs at /docs)")
    uvicorn.run("difflines.api.app:app", **options)


if __name__ == "__main__":
    main()
