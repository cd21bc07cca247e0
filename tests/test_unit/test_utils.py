"""
Test suite for reference and path helper functions.
"""
import pytest
from htmlpack.utils import file_extension, is_local_reference, strip_query


class TestIsLocalReference:
    """Test suite for is_local_reference."""

    @pytest.mark.parametrize("ref", [
        "img/a.png",
        "/_next/static/media/a.png",
        "../shared/a.png",
        "a.png?v=2",
    ])
    def test_local(self, ref):
        assert is_local_reference(ref)

    @pytest.mark.parametrize("ref", [
        "https://cdn.example.com/a.png",
        "HTTP://cdn.example.com/a.png",
        "//cdn.example.com/a.png",
        "DATA:image/png;base64,AAAA",
        "blob:https://example.com/uuid",
        "",
        "   ",
    ])
    def test_not_local(self, ref):
        assert not is_local_reference(ref)


class TestStripQuery:
    """Test suite for strip_query."""

    def test_query_and_fragment(self):
        assert strip_query("a.woff2?v=1#x") == "a.woff2"
        assert strip_query("a.eot?#iefix") == "a.eot"
        assert strip_query("a.svg#icon") == "a.svg"

    def test_plain_path_unchanged(self):
        assert strip_query("/_next/a.woff2") == "/_next/a.woff2"


class TestFileExtension:
    """Test suite for file_extension."""

    def test_lower_cased(self):
        assert file_extension("/_next/A.WOFF2?v=1") == ".woff2"

    def test_last_suffix_only(self):
        assert file_extension("font.min.woff") == ".woff"

    def test_no_extension(self):
        assert file_extension("noext") == ""
        assert file_extension("/_next.d/noext") == ""
