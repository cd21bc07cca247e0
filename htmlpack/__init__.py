"""
htmlpack - Turn a static HTML page into a single self-contained file.

Inlines local stylesheets (and the fonts their @font-face rules reference),
optionally inlines images, and optionally strips JavaScript.
"""

__version__ = "1.0.0"

# Main exports for API usage
from .pipeline import Config, ProcessingError, process_html
from .html import transform_node

__all__ = [
    "Config",
    "ProcessingError",
    "process_html",
    "transform_node",
    "__version__",
]
