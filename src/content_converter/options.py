"""Conversion settings shared by the rule table and the engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConverterOptions:
    """Immutable markdown output settings.

    Attributes:
        bullet_marker: Marker for unordered list items ('-', '*' or '+')
        strong_symbol: Delimiter for bold text ('**' or '__')
        em_symbol: Delimiter for italic text ('_' or '*')
        strike_symbol: Delimiter for strikethrough text
        code_fence: Fence for code blocks ('```' or '~~~')
        table_cell_separator: Joins the lines of a multi-line table cell
        escape_markdown: Backslash-escape markdown characters in text
    """
    bullet_marker: str = '-'
    strong_symbol: str = '**'
    em_symbol: str = '_'
    strike_symbol: str = '~~'
    code_fence: str = '```'
    table_cell_separator: str = ' / '
    escape_markdown: bool = True
