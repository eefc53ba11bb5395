"""Unit tests for content_converter.url_cleaner module."""

import pytest

from src.content_converter.url_cleaner import TRACKING_PARAMS, clean_url


class TestCleanUrl:
    """Test cases for clean_url function."""

    def test_removes_origin_marker_and_keeps_other_params(self):
        """clean_url should drop atlOrigin and keep unrelated parameters."""
        assert clean_url("https://e.com/p?atlOrigin=x&keep=1") == "https://e.com/p?keep=1"

    def test_removes_all_tracking_params(self):
        """clean_url should drop every denylisted parameter."""
        url = "https://e.com/wiki/x?focusedCommentId=12&src=mail&atlOrigin=abc"

        assert clean_url(url) == "https://e.com/wiki/x"

    def test_tracking_params_are_fixed(self):
        """The denylist should contain exactly the Confluence tracking markers."""
        assert TRACKING_PARAMS == {"atlOrigin", "focusedCommentId", "src"}

    def test_param_names_are_case_sensitive(self):
        """clean_url should only remove exact parameter names."""
        assert clean_url("https://e.com/p?SRC=1") == "https://e.com/p?SRC=1"

    def test_sorts_remaining_params_by_key(self):
        """clean_url should serialize parameters in a stable order."""
        assert clean_url("https://e.com/p?b=2&a=1") == "https://e.com/p?a=1&b=2"

    def test_repeated_keys_keep_relative_order(self):
        """Values of a repeated key should stay in their original order."""
        assert clean_url("https://e.com/p?x=2&a=0&x=1") == "https://e.com/p?a=0&x=2&x=1"

    def test_keeps_fragment(self):
        """clean_url should preserve the fragment."""
        assert clean_url("https://e.com/p?src=x#section-2") == "https://e.com/p#section-2"

    def test_keeps_blank_values(self):
        """Parameters with empty values should survive cleanup."""
        assert clean_url("https://e.com/p?flag=&src=1") == "https://e.com/p?flag="

    def test_relative_url(self):
        """clean_url should handle site-relative Confluence links."""
        url = "/wiki/spaces/ENG/pages/1?src=contextnavpagetreemode"

        assert clean_url(url) == "/wiki/spaces/ENG/pages/1"

    def test_url_without_query_unchanged(self):
        """URLs without a query should come back as they were."""
        assert clean_url("https://e.com/p") == "https://e.com/p"

    def test_trims_surrounding_whitespace(self):
        """clean_url should ignore whitespace around the URL."""
        assert clean_url("  https://e.com/p?src=1  ") == "https://e.com/p"

    def test_unparseable_url_returned_unchanged(self):
        """clean_url should never fail; bad URLs come back verbatim."""
        raw = "http://[::1/broken?src=1"

        assert clean_url(raw) == raw

    @pytest.mark.parametrize("url", [
        "https://e.com/p?atlOrigin=x&keep=1",
        "https://e.com/p?q=a b&z=%2F&a=1",
        "/wiki/x?src=nav#frag",
        "mailto:team@example.com",
        "https://e.com/p?",
    ])
    def test_idempotent(self, url):
        """Cleaning an already-clean URL should not change it."""
        once = clean_url(url)

        assert clean_url(once) == once
