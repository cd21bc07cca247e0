"""
pipeline.py
===========

Reads one HTML file, runs the tree transformation once over the parsed
document, and writes the self-contained result.
"""
import os
from dataclasses import dataclass, field

from bs4 import ParserRejectedMarkup

from .debug import debug_print, set_verbose
from .html import parse_html, render_html, transform_node
from .resources import DEFAULT_ASSET_PREFIX


class ProcessingError(Exception):
    """A failure that aborts the whole run (input, parse or output)."""

# ───────────────────────── data structures ──────────────────────────

@dataclass
class Config:
    """Configuration and per-run state for one htmlpack invocation.

    Example usage:
        # From command line arguments
        config = Config.from_args(parsed_args)

        # Programmatic usage
        config = Config(
            input_file="site/index.html",
            output_file="out.html",
            remove_js=True,
        )

    Environment variables:
        HTMLPACK_ASSET_PREFIX: Bundler asset prefix joined onto the input directory
        HTMLPACK_VERBOSE: Enable verbose output (1/true/yes)
    """

    # ─── Run Configuration ───
    input_file: str = ""
    output_file: str = ""
    remove_js: bool = False
    embed_images: bool = False
    asset_prefix: str = field(default_factory=lambda: os.getenv("HTMLPACK_ASSET_PREFIX", DEFAULT_ASSET_PREFIX))
    verbose: bool = field(default_factory=lambda: os.getenv("HTMLPACK_VERBOSE", "").lower() in ("1", "true", "yes"))

    # ─── Per-run State ───
    processed_urls: set = field(default_factory=set)
    stats: dict = field(default_factory=lambda: {"stylesheets": 0, "fonts": 0, "images": 0, "warnings": 0})

    @property
    def base_dir(self) -> str:
        """Directory containing the input file; relative asset roots hang off it."""
        return os.path.dirname(self.input_file)

    @classmethod
    def from_args(cls, args) -> 'Config':
        """Create a Config instance from command line arguments.

        @param args: Parsed command line arguments
        @return: Configured Config instance
        @raises ValueError: If arguments are invalid
        """
        config = cls(
            input_file=args.input,
            output_file=args.output,
            remove_js=args.remove_js,
            embed_images=args.embed_images,
        )

        # Only override the environment when given on the command line
        if args.asset_prefix:
            config.asset_prefix = args.asset_prefix
        if args.verbose:
            config.verbose = True

        if not config.asset_prefix.startswith("/"):
            raise ValueError(f"Invalid asset prefix (must start with '/'): {config.asset_prefix}")

        return config

# ───────────────────────── driver ──────────────────────────

def process_html(config: Config) -> str:
    """Inline assets of ``config.input_file`` and write ``config.output_file``.

    @param config: Run configuration
    @return: Absolute path of the written file
    @raises ProcessingError: If the input cannot be read or parsed, or the output cannot be written
    """
    set_verbose(config.verbose)

    try:
        with open(config.input_file, "rb") as fh:
            markup = fh.read()
    except OSError as e:
        raise ProcessingError(f"error opening input file: {e}") from e

    try:
        soup = parse_html(markup)
    except ParserRejectedMarkup as e:
        raise ProcessingError(f"error parsing HTML: {e}") from e

    transform_node(soup, config)

    output = render_html(soup)
    try:
        fh = open(config.output_file, "wb")
    except OSError as e:
        raise ProcessingError(f"error creating output file: {e}") from e
    try:
        with fh:
            fh.write(output)
    except OSError as e:
        raise ProcessingError(f"error writing output file: {e}") from e

    s = config.stats
    debug_print(
        f"[DEBUG] Inlined {s['stylesheets']} stylesheet(s), {s['fonts']} font(s), "
        f"{s['images']} image(s); {s['warnings']} warning(s)"
    )
    return os.path.abspath(config.output_file)
