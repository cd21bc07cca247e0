"""
css.py - @font-face font inlining for embedded stylesheets

Only enough CSS is understood to find `@font-face { ... }` blocks and the
`url(...)` references inside them. Each local font is replaced by a base64
data URI so the stylesheet no longer depends on files next to the page.

Key functions:
- decode_css(): Stylesheet bytes to text, honouring BOM and @charset
- find_font_face_blocks(): Locate @font-face blocks with a brace scanner
- find_font_urls(): Extract bundler-asset font paths from one block
- rewrite_font_faces(): Inline every font referenced from those blocks
"""

import re
from typing import List, Optional

from bs4.dammit import UnicodeDammit

from htmlpack.debug import debug_print, warn_print
from htmlpack.resources import font_mime_type, make_data_uri, read_asset

# ─── Patterns ───────────────────────────────────────────────
# At top level: a comment opener, a string opener, or an @font-face header
_TOP_LEVEL_RE = re.compile(r"""/\*|["']|@font-face\s*\{""", re.IGNORECASE)
_CHARSET_RE = re.compile(rb'@charset "([^"]+)";')
_UTF8_BOM = b"\xef\xbb\xbf"

# Tried after any @charset declaration, in order
FALLBACK_CSS_ENCODINGS = ("utf-8", "windows-1252")


def _font_url_re(prefix: str) -> re.Pattern:
    """url('/_next/...') with optional quotes; group 1 is the path."""
    root = re.escape(prefix.rstrip("/") + "/")
    return re.compile(rf"""url\(\s*['"]?({root}[^'"()]+)['"]?\s*\)""")

# ───────────────────────── decoding ──────────────────────────

def decode_css(css_bytes: bytes) -> str:
    """Decode a stylesheet read from disk.

    A leading `@charset "...";` rule wins, then UTF-8, then windows-1252
    (a superset of Latin-1 for printable text). A byte order mark is dropped.

    @param css_bytes (bytes): Raw stylesheet file contents.

    @return (str): Stylesheet text.
    """

    m = _CHARSET_RE.match(css_bytes[len(_UTF8_BOM):] if css_bytes.startswith(_UTF8_BOM) else css_bytes)
    encodings = [m.group(1).decode("ascii", "replace")] if m else []
    encodings.extend(FALLBACK_CSS_ENCODINGS)

    dammit = UnicodeDammit(css_bytes, known_definite_encodings=encodings)
    if dammit.unicode_markup is None:
        # latin-1 maps every byte, so this never fails
        return css_bytes.decode("latin-1")
    debug_print(f"[DEBUG] Decoded stylesheet as {dammit.original_encoding}")
    return dammit.unicode_markup

# ───────────────────────── block scanner ──────────────────────────

def _skip_string(css_text: str, start: int) -> int:
    """Return the index just past the quoted string opening at *start*."""
    quote = css_text[start]
    i = start + 1
    while i < len(css_text):
        ch = css_text[i]
        if ch == "\\":
            i += 2
            continue
        # an unescaped newline ends an unterminated CSS string
        if ch == quote or ch == "\n":
            return i + 1
        i += 1
    return i


def _find_block_end(css_text: str, start: int) -> Optional[int]:
    """Find the brace closing a block whose body starts at *start*.

    Comments and quoted strings are skipped, so braces inside them do not count.
    Nested blocks are kept as part of the body.

    @param css_text (str): Full stylesheet text.
    @param start (int): Index right after the opening '{'.

    @return (Optional[int]): Index just past the closing '}', or None if the block never closes.
    """

    depth = 1
    i = start
    while i < len(css_text):
        if css_text.startswith("/*", i):
            close = css_text.find("*/", i + 2)
            if close == -1:
                return None
            i = close + 2
            continue

        ch = css_text[i]
        if ch in "\"'":
            i = _skip_string(css_text, i)
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return None


def find_font_face_blocks(css_text: str) -> List[str]:
    """Return the text of every @font-face block, in stylesheet order.

    '@font-face {' written inside a comment or a quoted string is not a block.

    @param css_text (str): Stylesheet text.

    @return (List[str]): Each block from '@font-face' through its closing brace.
    """

    blocks = []
    pos = 0
    while True:
        m = _TOP_LEVEL_RE.search(css_text, pos)
        if not m:
            break
        token = m.group(0)
        if token == "/*":
            close = css_text.find("*/", m.end())
            if close == -1:
                break
            pos = close + 2
            continue
        if token in ("\"", "'"):
            pos = _skip_string(css_text, m.start())
            continue

        end = _find_block_end(css_text, m.end())
        if end is None:
            debug_print(f"[DEBUG] Unterminated @font-face block at offset {m.start()}, ignoring")
            break
        blocks.append(css_text[m.start():end])
        pos = end
    return blocks


def find_font_urls(block: str, prefix: str) -> List[str]:
    """Extract the font paths under *prefix* referenced by url() in *block*.

    @param block (str): One @font-face block.
    @param prefix (str): Bundler asset prefix, e.g. '/_next'.

    @return (List[str]): Paths as written (quotes removed), in order of appearance.
    """

    return [m.group(1).strip() for m in _font_url_re(prefix).finditer(block)]

# ───────────────────────── rewriter ──────────────────────────

def rewrite_font_faces(css_text: str, config) -> str:
    """Inline every local font referenced from @font-face blocks.

    Every occurrence of a font path anywhere in the stylesheet is replaced by
    its data URI, not only the one inside url(). Longer paths are replaced
    first so 'a.woff' never clobbers part of 'a.woff2'.

    @param css_text (str): Stylesheet text.
    @param config (Config): Run configuration (base_dir, asset_prefix, stats).

    @return (str): Stylesheet text with fonts inlined.
    """

    font_paths: List[str] = []
    for block in find_font_face_blocks(css_text):
        for font_path in find_font_urls(block, config.asset_prefix):
            if font_path not in font_paths:
                font_paths.append(font_path)

    for font_path in sorted(font_paths, key=len, reverse=True):
        mime_type = font_mime_type(font_path)
        if mime_type is None:
            config.stats["warnings"] += 1
            warn_print(f"[WARN] Unknown font type for {font_path}, leaving it linked")
            continue

        data = read_asset(font_path, config, "font")
        if data is None:
            continue

        css_text = css_text.replace(font_path, make_data_uri(data, mime_type))
        config.stats["fonts"] += 1
        debug_print(f"[DEBUG] Inlined font {font_path} as {mime_type}")

    return css_text
