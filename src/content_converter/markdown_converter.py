"""Confluence view-HTML to markdown conversion entry point.

This module wires the pipeline together: decode, parse with BeautifulSoup
(lxml tree builder), clean the tree with the Confluence preprocessor, and
walk it with the rule-driven conversion engine. Output is compact markdown
intended for LLM context and terminal reading, not round-tripping.
"""

import logging
from typing import Optional, Union

from bs4 import BeautifulSoup

from .engine import ConversionEngine
from .errors import ParseError
from .options import ConverterOptions
from .preprocessor import preprocess
from .rules import RuleTable

logger = logging.getLogger(__name__)


class MarkdownConverter:
    """Converts Confluence view HTML into markdown.

    The engine and its rule table are built once per converter and never
    modified afterwards, so a single instance can be shared across threads.
    Every call parses into its own document.

    Example:
        >>> converter = MarkdownConverter()
        >>> converter.convert('<h2>Overview</h2><p><span class="status-macro">LIVE</span></p>')
        '## Overview\\n\\n[LIVE]'
    """

    def __init__(self, options: Optional[ConverterOptions] = None,
                 rules: Optional[RuleTable] = None):
        """Initialize MarkdownConverter.

        Args:
            options: Output settings (defaults to ConverterOptions())
            rules: Custom rule table (defaults to the Confluence rule set)
        """
        self.parser = "lxml"
        self.engine = ConversionEngine(options, rules)

    @property
    def options(self) -> ConverterOptions:
        return self.engine.options

    def convert(self, html: Union[str, bytes]) -> str:
        """Convert an HTML fragment or document to markdown.

        Args:
            html: HTML as text, or UTF-8 encoded bytes

        Returns:
            Markdown string; empty for empty or whitespace-only input

        Raises:
            ParseError: If the input cannot be decoded or parsed
        """
        if isinstance(html, bytes):
            html = self._decode(html)

        if not html.strip():
            return ""

        soup = self._parse(html)
        preprocess(soup)
        markdown = self.engine.convert_document(soup)

        logger.debug(f"Converted {len(html)} characters of HTML to {len(markdown)} characters of markdown")
        return markdown

    def _decode(self, data: bytes) -> str:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Input is not valid UTF-8 ({e.reason})", offset=e.start) from e

    def _parse(self, html: str) -> BeautifulSoup:
        try:
            return BeautifulSoup(html, self.parser)
        except Exception as e:
            raise ParseError(str(e)) from e


_default_converter = MarkdownConverter()


def convert(html: Union[str, bytes]) -> str:
    """Convert Confluence view HTML to markdown with default options.

    Args:
        html: HTML as text, or UTF-8 encoded bytes

    Returns:
        Markdown string

    Raises:
        ParseError: If the input cannot be decoded or parsed
    """
    return _default_converter.convert(html)
