"""Content conversion module for Confluence view HTML → markdown.

This module provides the MarkdownConverter, which strips Confluence layout
noise from a page body and renders the rest as compact markdown, together
with the URL cleanup and rule table it is built from.
"""

from .errors import ConverterError, ParseError
from .markdown_converter import MarkdownConverter, convert
from .options import ConverterOptions
from .rules import Rule, RuleKind, RuleTable, default_rule_table
from .url_cleaner import clean_url

__all__ = [
    'ConverterError',
    'ParseError',
    'MarkdownConverter',
    'convert',
    'ConverterOptions',
    'Rule',
    'RuleKind',
    'RuleTable',
    'default_rule_table',
    'clean_url',
]
