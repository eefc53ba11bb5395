"""Confluence view-HTML cleanup applied before markdown conversion.

This module mutates a parsed document in place: it drops auto-generated
macro output that adds noise without information, flattens layout wrappers
so their content converts as if it were written at the top level, prunes
empty paragraphs, and strips tracking parameters from link targets.

Noise removal runs to completion before any wrapper is unwrapped, so a
noise block nested inside a layout cell is always removed regardless of
document order.
"""

import logging

from bs4 import BeautifulSoup

from .url_cleaner import clean_url

logger = logging.getLogger(__name__)

# Subtrees removed entirely (table of contents, activity feeds, contributor
# lists, table column metadata)
NOISE_SELECTORS = (
    '.toc-macro',
    '.recently-updated',
    '.plugin-contributors',
    'colgroup',
    'col',
)

# Wrappers replaced by their own children (page layouts, table and code panels)
UNWRAP_SELECTORS = (
    'div.contentLayout2',
    'div.columnLayout',
    'div.cell',
    'div.innerCell',
    'div.table-wrap',
    'div.code.panel',
    'div.codeContent.panelContent',
)


def preprocess(soup: BeautifulSoup) -> None:
    """Clean a parsed Confluence page in place.

    Args:
        soup: Parsed document, modified in place
    """
    removed = _remove_noise(soup)
    unwrapped = _unwrap_layout(soup)
    pruned = _prune_empty_paragraphs(soup)
    cleaned = _clean_links(soup)

    logger.debug(
        f"Preprocessed document: removed {removed} noise block(s), "
        f"unwrapped {unwrapped} wrapper(s), pruned {pruned} empty paragraph(s), "
        f"cleaned {cleaned} link(s)"
    )


def _remove_noise(soup: BeautifulSoup) -> int:
    count = 0
    for selector in NOISE_SELECTORS:
        for element in soup.select(selector):
            # Nested matches are destroyed along with their enclosing match
            if element.decomposed:
                continue
            element.decompose()
            count += 1
    return count


def _unwrap_layout(soup: BeautifulSoup) -> int:
    count = 0
    for selector in UNWRAP_SELECTORS:
        for element in soup.select(selector):
            element.unwrap()
            count += 1
    return count


def _prune_empty_paragraphs(soup: BeautifulSoup) -> int:
    """Remove paragraphs with no text and no child elements.

    Paragraphs holding only inline elements (an image, an empty link) are
    kept; the rule table decides what they render as.
    """
    count = 0
    for paragraph in soup.find_all('p'):
        text = paragraph.get_text().replace('\u00a0', '')
        if not text.strip() and paragraph.find(True) is None:
            paragraph.decompose()
            count += 1
    return count


def _clean_links(soup: BeautifulSoup) -> int:
    count = 0
    for anchor in soup.find_all('a', href=True):
        href = anchor['href'].strip()
        if not href:
            continue
        anchor['href'] = clean_url(href)
        count += 1
    return count
