"""
html.py - HTML tree processing for self-contained output

This module walks a parsed document once and rewrites it in place so the
page no longer needs anything next to it on disk: stylesheets become inline
<style> elements (with their fonts inlined), images optionally become data
URIs, and JavaScript is optionally stripped.

Key functions:
- parse_html() / render_html(): Bytes <-> BeautifulSoup tree
- transform_node(): The single top-down pass over the tree
- embed_css(): Replace a stylesheet <link> with an inline <style>
- embed_image(): Rewrite an <img src> to a data URI
"""

from typing import Optional

from bs4 import BeautifulSoup, Tag
from bs4.dammit import EntitySubstitution
from bs4.element import Stylesheet
from bs4.formatter import HTMLFormatter

from htmlpack.css import decode_css, rewrite_font_faces
from htmlpack.debug import debug_print, warn_print
from htmlpack.resources import image_mime_type, make_data_uri, read_asset
from htmlpack.utils import is_local_reference

# ─── Constants ───────────────────────────────────────────────
HTML_PARSER = "html.parser"
OUTPUT_ENCODING = "utf-8"
MAX_REF_LOG_LENGTH = 80  # Truncate references in logs for readability

# Inline event handler attributes dropped when JavaScript is removed.
# Exact, case-sensitive names; other on* attributes are kept.
JS_EVENT_ATTRIBUTES: tuple[str, ...] = (
    "onclick", "onload", "onunload", "onchange", "onsubmit", "onreset",
    "onselect", "onblur", "onfocus", "onkeydown", "onkeypress", "onkeyup",
    "onmouseover", "onmouseout", "onmousedown", "onmouseup", "onmousemove",
)

# ───────────────────────── parse / render ──────────────────────────

class SourceOrderFormatter(HTMLFormatter):
    """bs4's "minimal" HTML formatter, minus the alphabetical attribute sort."""

    def __init__(self):
        super().__init__(entity_substitution=EntitySubstitution.substitute_xml)

    def attributes(self, tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


_SOURCE_ORDER = SourceOrderFormatter()


def parse_html(markup) -> BeautifulSoup:
    """
    Parse an HTML document into a mutable tree.

    Attribute values are kept as raw strings (no splitting of rel/class) so
    they compare and serialize exactly as written.

    @param markup: HTML as bytes or str
    @return: Document root
    """
    return BeautifulSoup(markup, HTML_PARSER, multi_valued_attributes=None)


def render_html(soup: BeautifulSoup) -> bytes:
    """
    Serialize a document tree back to bytes.

    Attributes are written in the order they were parsed (or added).

    @param soup: Document root
    @return: UTF-8 encoded HTML
    """
    return soup.encode(OUTPUT_ENCODING, formatter=_SOURCE_ORDER)

# ───────────────────────── predicates ──────────────────────────

def _attr_text(node: Tag, key: str) -> Optional[str]:
    """Attribute value as a string; list values from other parsers are re-joined."""
    value = node.attrs.get(key)
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return value


def is_preload_js(node: Tag) -> bool:
    """True for <link rel="preload" as="script">."""
    return _attr_text(node, "rel") == "preload" and _attr_text(node, "as") == "script"


def is_stylesheet(node: Tag) -> bool:
    """True for <link rel="stylesheet">."""
    return _attr_text(node, "rel") == "stylesheet"


def remove_inline_js(node: Tag) -> None:
    """Drop inline JavaScript event handler attributes from *node*."""
    for key in [k for k in node.attrs if k in JS_EVENT_ATTRIBUTES]:
        del node.attrs[key]

# ───────────────────────── embedding ──────────────────────────

def _document_of(node: Tag) -> Optional[BeautifulSoup]:
    root = node
    while root.parent is not None:
        root = root.parent
    return root if isinstance(root, BeautifulSoup) else None


def embed_css(link: Tag, config) -> None:
    """
    Replace a stylesheet <link> with an inline <style type="text/css">.

    The style element takes the link's position among its siblings. If the
    stylesheet cannot be read the link is left untouched.

    @param link: <link rel="stylesheet"> element attached to a document
    @param config: Run configuration
    """
    href = _attr_text(link, "href")
    if not href:
        config.stats["warnings"] += 1
        warn_print("[WARN] Stylesheet link without href, leaving it in place")
        return

    soup = _document_of(link)
    if soup is None:
        debug_print(f"[DEBUG] Stylesheet link {href[:MAX_REF_LOG_LENGTH]} is detached, skipping")
        return

    css_bytes = read_asset(href, config, "CSS")
    if css_bytes is None:
        return

    css_text = rewrite_font_faces(decode_css(css_bytes), config)

    style = soup.new_tag("style", attrs={"type": "text/css"})
    style.append(Stylesheet(css_text))
    link.insert_before(style)
    link.extract()

    config.stats["stylesheets"] += 1
    debug_print(f"[DEBUG] Inlined stylesheet {href[:MAX_REF_LOG_LENGTH]}")


def embed_image(img: Tag, config) -> None:
    """
    Rewrite an <img src> to a base64 data URI.

    Each src value is embedded at most once per run; later images with the
    same src keep their original reference.

    @param img: <img> element
    @param config: Run configuration (processed_urls is updated)
    """
    src = _attr_text(img, "src")
    if not src:
        config.stats["warnings"] += 1
        warn_print("[WARN] Image without src, leaving it in place")
        return

    if src in config.processed_urls:
        debug_print(f"[DEBUG] Image {src[:MAX_REF_LOG_LENGTH]} already embedded in this run")
        return

    if not is_local_reference(src):
        debug_print(f"[DEBUG] Skipping non-local image {src[:MAX_REF_LOG_LENGTH]}")
        return

    data = read_asset(src, config, "image")
    if data is None:
        return

    img["src"] = make_data_uri(data, image_mime_type(src))
    config.processed_urls.add(src)
    config.stats["images"] += 1
    debug_print(f"[DEBUG] Inlined image {src[:MAX_REF_LOG_LENGTH]}")

# ───────────────────────── traversal ──────────────────────────

def _apply_rules(node, config) -> bool:
    """Run the per-element rules on *node*.

    @return: False if the node is not an element or was detached
    """
    if not isinstance(node, Tag):
        return False

    if node.name == "script":
        if config.remove_js:
            node.extract()
            return False
    elif node.name == "link":
        if is_preload_js(node) and config.remove_js:
            node.extract()
            return False
        elif is_stylesheet(node):
            embed_css(node, config)
    elif node.name == "img" and config.embed_images:
        embed_image(node, config)

    if config.remove_js:
        remove_inline_js(node)
    return True


def _first_child(node: Tag):
    return node.contents[0] if node.contents else None


def transform_node(node, config) -> None:
    """
    Apply the per-element rules to *node*, then to every node below it.

    Nodes are visited depth-first in document order. Each node's next
    sibling is taken before the node is processed, so a node may detach or
    replace itself without breaking the walk. Nodes inserted before the
    cursor are not visited. The walk keeps its own stack, so nesting depth
    is not limited by the interpreter's recursion limit.

    @param node: Any tree node; only Tag instances are acted on
    @param config: Run configuration
    """
    if not _apply_rules(node, config):
        return

    # each entry is the next node to visit at one nesting level
    cursors = [_first_child(node)]
    while cursors:
        child = cursors.pop()
        if child is None:
            continue
        cursors.append(child.next_sibling)
        if _apply_rules(child, config):
            cursors.append(_first_child(child))
