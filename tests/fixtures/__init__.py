"""Test fixtures for Confluence HTML conversion tests.

This module provides sample Confluence view-format page bodies together
with the markdown they are expected to convert to.
"""

from .sample_pages import (
    SAMPLE_PAGE_VIEW,
    SAMPLE_PAGE_VIEW_MARKDOWN,
    SAMPLE_PAGE_NOISY,
    SAMPLE_TABLE_LINE_BREAKS,
    SAMPLE_PAGE_LAYOUT,
    SAMPLE_CODE_PANEL,
    SAMPLE_CODE_PANEL_MARKDOWN,
    SAMPLE_TABLE_WITH_COLGROUP,
    SAMPLE_TABLE_WITH_COLGROUP_MARKDOWN,
)

__all__ = [
    'SAMPLE_PAGE_VIEW',
    'SAMPLE_PAGE_VIEW_MARKDOWN',
    'SAMPLE_PAGE_NOISY',
    'SAMPLE_TABLE_LINE_BREAKS',
    'SAMPLE_PAGE_LAYOUT',
    'SAMPLE_CODE_PANEL',
    'SAMPLE_CODE_PANEL_MARKDOWN',
    'SAMPLE_TABLE_WITH_COLGROUP',
    'SAMPLE_TABLE_WITH_COLGROUP_MARKDOWN',
]
