"""Unit tests for content_converter.preprocessor module."""

import pytest
from bs4 import BeautifulSoup, Tag

from src.content_converter.preprocessor import preprocess


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def _body_tags(soup: BeautifulSoup) -> list:
    return [child.name for child in soup.body.children if isinstance(child, Tag)]


class TestNoiseRemoval:
    """Test cases for removal of auto-generated macro output."""

    @pytest.mark.parametrize("css_class", ["toc-macro", "recently-updated", "plugin-contributors"])
    def test_removes_noise_macro(self, css_class):
        """preprocess should remove the whole noise subtree."""
        soup = _soup(
            f'<div class="{css_class} conf-macro"><ul><li>Noise entry</li></ul></div>'
            '<p>Body</p>'
        )

        preprocess(soup)

        assert "Noise entry" not in soup.get_text()
        assert "Body" in soup.get_text()

    def test_removes_column_metadata(self):
        """preprocess should remove colgroup and col elements."""
        soup = _soup(
            '<table><colgroup><col/><col/></colgroup>'
            '<tr><td>A</td><td>B</td></tr></table>'
        )

        preprocess(soup)

        assert soup.find("colgroup") is None
        assert soup.find("col") is None
        assert len(soup.find_all("td")) == 2

    def test_nested_noise_of_same_kind(self):
        """Nested matches of one selector should not break removal."""
        soup = _soup(
            '<div class="toc-macro"><div class="toc-macro">Inner</div>Outer</div>'
            '<p>Kept</p>'
        )

        preprocess(soup)

        assert soup.get_text().strip() == "Kept"

    def test_noise_inside_layout_wrapper_removed(self):
        """Noise is removed before wrappers are flattened."""
        soup = _soup(
            '<div class="columnLayout"><div class="cell"><div class="innerCell">'
            '<div class="toc-macro">TOC</div><p>Text</p>'
            '</div></div></div>'
        )

        preprocess(soup)

        assert "TOC" not in soup.get_text()
        assert _body_tags(soup) == ["p"]


class TestUnwrapLayout:
    """Test cases for flattening of layout wrappers."""

    def test_unwraps_column_layout(self):
        """Layout sections, cells and inner cells should be replaced by their content."""
        soup = _soup(
            '<div class="contentLayout2"><div class="columnLayout two-equal">'
            '<div class="cell normal"><div class="innerCell"><p>Left</p></div></div>'
            '<div class="cell normal"><div class="innerCell"><p>Right</p></div></div>'
            '</div></div>'
        )

        preprocess(soup)

        assert soup.find("div") is None
        assert [p.get_text() for p in soup.find_all("p")] == ["Left", "Right"]

    def test_unwrap_keeps_position_among_siblings(self):
        """Unwrapped children should take the wrapper's place."""
        soup = _soup(
            '<p>Before</p>'
            '<div class="table-wrap"><table><tr><td>A</td></tr></table></div>'
            '<p>After</p>'
        )

        preprocess(soup)

        assert _body_tags(soup) == ["p", "table", "p"]

    def test_unwraps_code_panel(self):
        """Code macro panels should be flattened down to the <pre>."""
        soup = _soup(
            '<div class="code panel pdl"><div class="codeContent panelContent pdl">'
            '<pre>x = 1</pre></div></div>'
        )

        preprocess(soup)

        assert _body_tags(soup) == ["pre"]

    def test_requires_all_wrapper_classes(self):
        """A div with only the 'code' class is not a code panel."""
        soup = _soup('<div class="code"><pre>x = 1</pre></div>')

        preprocess(soup)

        assert _body_tags(soup) == ["div"]

    def test_requires_div_element(self):
        """Wrapper classes on non-div elements are left alone."""
        soup = _soup('<p><span class="cell">x</span></p>')

        preprocess(soup)

        assert soup.find("span", class_="cell") is not None


class TestEmptyParagraphs:
    """Test cases for pruning of empty paragraphs."""

    def test_removes_blank_and_nbsp_paragraphs(self):
        """Paragraphs holding only whitespace or &nbsp; should be removed."""
        soup = _soup('<p>&nbsp;</p><p>   </p><p></p><p>Text</p>')

        preprocess(soup)

        assert [p.get_text() for p in soup.find_all("p")] == ["Text"]

    def test_keeps_paragraph_with_child_element(self):
        """Paragraphs with inline elements are kept for the converter to decide."""
        soup = _soup('<p><img src="diagram.png"/></p>')

        preprocess(soup)

        assert soup.find("p") is not None


class TestLinkCleanup:
    """Test cases for href normalization."""

    def test_rewrites_href_without_tracking_params(self):
        """Every anchor href should be cleaned before conversion."""
        soup = _soup('<a href=" https://e.com/p?atlOrigin=x&amp;keep=1 ">x</a>')

        preprocess(soup)

        assert soup.find("a")["href"] == "https://e.com/p?keep=1"

    def test_leaves_blank_href_alone(self):
        """Blank hrefs are not rewritten."""
        soup = _soup('<a href="">x</a>')

        preprocess(soup)

        assert soup.find("a")["href"] == ""

    def test_anchor_without_href_untouched(self):
        """Anchors used as targets have no href to clean."""
        soup = _soup('<a name="section">x</a>')

        preprocess(soup)

        assert not soup.find("a").has_attr("href")
