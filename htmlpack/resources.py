"""
resources.py – Local asset resolution and data URI encoding

This module handles:
- Mapping an href/src/url() reference onto a filesystem path
- Reading asset bytes, turning unreadable files into warnings
- Picking MIME types (fixed table for fonts, generic lookup for images)
- Building base64 data URIs

Key functions:
- resolve_asset_path(): Reference -> filesystem path
- read_asset(): Resolve and read, or warn and return None
- make_data_uri(): Bytes + MIME type -> data: URI
"""

import base64
import mimetypes
import os
from typing import Optional

from htmlpack.debug import debug_print, warn_print
from htmlpack.utils import file_extension, strip_query

# ─── Constants ───────────────────────────────────────────────
DEFAULT_ASSET_PREFIX = "/_next"  # bundler-emitted static assets live under this root
DEFAULT_IMAGE_MIME = "image/png"  # used when the image extension is unknown

# Font formats and their MIME types
FONT_MIME_TYPES: dict[str, str] = {
    ".woff2": "font/woff2",
    ".woff": "font/woff",
    ".ttf": "font/ttf",
    ".eot": "application/vnd.ms-fontobject",
    ".otf": "font/otf",
}

# ───────────────────────── resolver ──────────────────────────

def resolve_asset_path(ref: str, base_dir: str, prefix: str = DEFAULT_ASSET_PREFIX) -> str:
    """Map a document or stylesheet reference onto a filesystem path.

    References under the bundler prefix are site-root relative, so they are
    joined onto the directory of the input document. Anything else is used as
    written.

    @param ref (str): href/src/url() value.
    @param base_dir (str): Directory containing the input HTML file.
    @param prefix (str): Bundler asset prefix, e.g. '/_next'.

    @return (str): Path to open.
    """

    path = strip_query(ref)
    if path.startswith(prefix):
        # keep '/_next' as a segment under base_dir, not as filesystem root
        return os.path.join(base_dir, path.lstrip("/"))
    return path


def read_asset(ref: str, config, kind: str) -> Optional[bytes]:
    """Resolve *ref* against the run configuration and read the whole file.

    @param ref (str): Original reference from the document or stylesheet.
    @param config (Config): Run configuration (base_dir, asset_prefix, stats).
    @param kind (str): Asset label for messages ('CSS', 'font', 'image').

    @return (Optional[bytes]): File content, or None if it could not be read.
    """

    path = resolve_asset_path(ref, config.base_dir, config.asset_prefix)
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except OSError as e:
        config.stats["warnings"] += 1
        warn_print(f"[WARN] Could not read {kind} file {path}: {e}")
        return None

    debug_print(f"[DEBUG] Read {kind} file {path} ({len(data)} bytes)")
    return data

# ───────────────────────── encoder ──────────────────────────

def font_mime_type(ref: str) -> Optional[str]:
    """Look up a font MIME type in the fixed extension table.

    @param ref (str): Font path; only its extension matters.

    @return (Optional[str]): MIME type, or None for an unknown extension.
    """

    return FONT_MIME_TYPES.get(file_extension(ref))


def image_mime_type(ref: str) -> str:
    """Guess an image MIME type from its file name.

    @param ref (str): Image path.

    @return (str): MIME type, 'image/png' when it cannot be determined.
    """

    mime, _ = mimetypes.guess_type(strip_query(ref))
    return mime or DEFAULT_IMAGE_MIME


def make_data_uri(data: bytes, mime_type: str) -> str:
    """Encode raw bytes as a base64 data URI.

    @param data (bytes): Asset content.
    @param mime_type (str): MIME type to declare.

    @return (str): 'data:<mime>;base64,<payload>' with a padded, unwrapped payload.
    """

    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"
