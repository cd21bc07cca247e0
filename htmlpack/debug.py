"""
debug.py - Diagnostic output utilities

Provides a centralized way to control diagnostic output across the package.
Debug lines only show in verbose mode; warnings about assets that could not
be embedded always go to stderr so stdout stays reserved for the result line.

Usage:
    # Set verbose mode globally
    set_verbose(True)

    # Use in modules
    debug_print("[DEBUG] This only shows in verbose mode")
    warn_print("[WARN] Could not read CSS file site/a.css")
"""

import sys
from typing import Any

# Global debug flag - set by the CLI or by Config users
_VERBOSE = False


def set_verbose(enabled: bool) -> None:
    """Set the global verbose flag.

    @param enabled: Whether to enable verbose debug output
    """
    global _VERBOSE
    _VERBOSE = enabled


def debug_print(*args: Any, **kwargs: Any) -> None:
    """Print debug message only if verbose mode is enabled.

    @param args: Arguments to pass to print()
    @param kwargs: Keyword arguments to pass to print()
    """
    if _VERBOSE:
        print(*args, **kwargs)


def warn_print(*args: Any, **kwargs: Any) -> None:
    """Print a warning to stderr regardless of verbose mode.

    @param args: Arguments to pass to print()
    @param kwargs: Keyword arguments to pass to print()
    """
    print(*args, file=sys.stderr, **kwargs)


def is_verbose() -> bool:
    """Check if verbose mode is enabled.

    @return: True if verbose mode is enabled
    """
    return _VERBOSE
