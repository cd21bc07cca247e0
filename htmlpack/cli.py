"""
Command-line interface for htmlpack.

This module contains the CLI argument parsing and main execution logic.
"""

from __future__ import annotations

import argparse
import sys

from .pipeline import Config, ProcessingError, process_html

# ─── argument parsing helpers ───────────────────────────────

def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="htmlpack",
        description="Inline stylesheets, fonts and images into a single self-contained HTML file.",
    )

    parser.add_argument(
        "--input",
        required=True,
        help="Path to input HTML file",
    )

    parser.add_argument(
        "--output",
        required=True,
        help="Path to output HTML file",
    )

    parser.add_argument(
        "--remove-js",
        action="store_true",
        help="Remove all JavaScript: <script> elements, script preloads and inline event handlers",
    )

    parser.add_argument(
        "--embed-images",
        action="store_true",
        help="Also inline local <img src> files as data URIs",
    )

    parser.add_argument(
        "--asset-prefix",
        help="Site-root prefix of bundler assets resolved against the input directory; defaults to '/_next'",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug output; prints all [DEBUG] statements",
    )

    return parser


def main(argv: list[str] | None = None):
    """Main entry point for the htmlpack CLI."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_args(args)
        output_path = process_html(config)
    except (ValueError, ProcessingError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Processed HTML file written to: {output_path}")


if __name__ == "__main__":
    main()
