"""
utils.py - Shared helpers for asset references and file paths

Consolidates the small string checks used by the resolver and the tree walk.
"""

import os


# ───────────────────────── Reference Classification ──────────────────────────

# Schemes that never point at a file next to the input document
_NON_LOCAL_PREFIXES = ("http://", "https://", "//", "data:", "blob:", "mailto:", "tel:")


def is_local_reference(ref: str) -> bool:
    """
    Check whether an attribute value names a file on the local filesystem.

    @param ref: Raw href/src value
    @return: False for remote URLs, data URIs and empty values
    """
    lowered = ref.strip().lower()
    if not lowered:
        return False
    return not lowered.startswith(_NON_LOCAL_PREFIXES)


def strip_query(ref: str) -> str:
    """
    Drop a query string or fragment from a reference.

    Font stacks commonly carry cache busters (`font.woff2?v=3`) or IE hacks
    (`font.eot?#iefix`) that are not part of the file name.

    @param ref: Reference as written in the document or stylesheet
    @return: Reference without anything from the first '?' or '#'
    """
    return ref.split("#", 1)[0].split("?", 1)[0]


# ───────────────────────── File Path Utilities ──────────────────────────

def file_extension(ref: str) -> str:
    """
    Return the lower-cased extension of a reference, including the dot.

    @param ref: File path or URL path
    @return: Extension such as '.woff2', or '' when there is none
    """
    return os.path.splitext(strip_query(ref))[1].lower()
