import pytest
from unittest.mock import Mock
from pathlib import Path

from htmlpack.debug import set_verbose
from htmlpack.pipeline import Config


# Not real font programs; only the bytes matter for embedding
FONT_BYTES = b"wOF2\x00\x01\x00\x00fake-font-payload\xff\xfe"
IMAGE_BYTES = b"\x89PNG\r\n\x1a\nfake-image-payload"

FONT_FACE_CSS = "@font-face{font-family:\"X\";src:url('/_next/static/font.woff2')}"


@pytest.fixture(autouse=True)
def quiet_debug():
    """Keep the module-level verbose flag from leaking between tests."""
    set_verbose(False)
    yield
    set_verbose(False)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Config defaults must not depend on the developer's shell."""
    monkeypatch.delenv("HTMLPACK_VERBOSE", raising=False)
    monkeypatch.delenv("HTMLPACK_ASSET_PREFIX", raising=False)


@pytest.fixture
def site_dir(tmp_path, monkeypatch):
    """A small exported site, with the working directory set to it.

    Layout:
        index.html
        style.css                      (one @font-face rule)
        logo.png
        _next/static/font.woff2
    """
    site = tmp_path / "site"
    (site / "_next" / "static").mkdir(parents=True)
    (site / "_next" / "static" / "font.woff2").write_bytes(FONT_BYTES)
    (site / "style.css").write_text(FONT_FACE_CSS, encoding="utf-8")
    (site / "logo.png").write_bytes(IMAGE_BYTES)
    (site / "index.html").write_text(
        '<html><head><link rel="stylesheet" href="style.css"></head>'
        '<body><img src="logo.png"></body></html>',
        encoding="utf-8",
    )
    # non-prefixed references are resolved as written, i.e. from the cwd
    monkeypatch.chdir(site)
    return site


@pytest.fixture
def font_bytes():
    return FONT_BYTES


@pytest.fixture
def image_bytes():
    return IMAGE_BYTES


@pytest.fixture
def make_config(site_dir):
    """Build a Config rooted at the sample site."""
    def _make(**overrides) -> Config:
        values = {
            "input_file": str(site_dir / "index.html"),
            "output_file": str(site_dir / "out.html"),
        }
        values.update(overrides)
        return Config(**values)
    return _make


@pytest.fixture
def config(make_config):
    """Default Config: JS kept, images not embedded."""
    return make_config()


@pytest.fixture
def mock_args(site_dir):
    """Mock CLI arguments with valid values."""
    args = Mock()
    args.input = str(site_dir / "index.html")
    args.output = str(site_dir / "out.html")
    args.remove_js = False
    args.embed_images = False
    args.asset_prefix = None
    args.verbose = False
    return args
