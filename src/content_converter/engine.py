"""Post-order tree walker that turns a parsed document into markdown.

The engine never mutates the tree. Each element's children are converted
first and joined into a single content string, which is then handed to the
rule table together with the element. Elements no rule claims contribute
their children's content only, so unknown markup degrades to its text.
"""

import re
from typing import List, Optional

from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from .options import ConverterOptions
from .rules import BLOCK_TAGS, RuleTable, default_rule_table
from .text import collapse_whitespace, escape_line_start, escape_markdown

_TRAILING_SPACE_RE = re.compile(r'[ \t]+\n')
_EXCESS_NEWLINES_RE = re.compile(r'\n{3,}')

# Text inside these is rendered verbatim (pre) or without escaping (code)
_VERBATIM_TAGS = frozenset({'pre'})
_LITERAL_TAGS = frozenset({'code', 'kbd', 'samp', 'tt', 'pre'})


class ConversionEngine:
    """Converts a BeautifulSoup tree into a markdown string.

    Attributes:
        options: Output settings passed to every rule
        rules: Rule table consulted for each element
    """

    def __init__(self, options: Optional[ConverterOptions] = None,
                 rules: Optional[RuleTable] = None):
        self.options = options if options is not None else ConverterOptions()
        self.rules = rules if rules is not None else default_rule_table()

    def convert_document(self, root: Tag) -> str:
        """Convert a whole document and tidy the result.

        Args:
            root: Parsed (and preprocessed) document or element

        Returns:
            Markdown with trailing spaces removed, at most one blank line
            between blocks, and no leading/trailing whitespace
        """
        markdown = self.convert_node(root)
        markdown = _TRAILING_SPACE_RE.sub('\n', markdown)
        markdown = _EXCESS_NEWLINES_RE.sub('\n\n', markdown)
        return markdown.strip()

    def convert_node(self, node: PageElement, verbatim: bool = False,
                     literal: bool = False) -> str:
        """Convert a single node and its subtree.

        The walk is iterative so arbitrarily deep documents cannot exhaust
        the interpreter stack.

        Args:
            node: Element or text node
            verbatim: Inside <pre>; whitespace is preserved
            literal: Inside code; markdown characters are not escaped

        Returns:
            Markdown fragment for the node
        """
        if not isinstance(node, Tag):
            return self._convert_leaf(node, verbatim, literal)

        stack = [_Frame(node, verbatim, literal)]
        result = ''
        while stack:
            frame = stack[-1]
            child = next(frame.children, None)

            if child is None:
                stack.pop()
                result = self._finish(frame)
                if stack:
                    stack[-1].fragments.append(result)
            elif isinstance(child, Tag):
                stack.append(_Frame(child, frame.verbatim, frame.literal))
            else:
                frame.fragments.append(self._convert_leaf(child, frame.verbatim, frame.literal))

        return result

    def _finish(self, frame: '_Frame') -> str:
        content = _join(frame.fragments, frame.verbatim)
        result = self.rules.apply(frame.element, content, self.options)
        if result is None:
            return content
        return result

    def _convert_leaf(self, node: PageElement, verbatim: bool, literal: bool) -> str:
        if isinstance(node, PreformattedString):
            # Comments, CDATA, doctypes, processing instructions
            return ''
        if isinstance(node, NavigableString):
            return self._convert_text(node, verbatim, literal)
        return ''

    def _convert_text(self, node: NavigableString, verbatim: bool, literal: bool) -> str:
        text = str(node)
        if verbatim:
            return text

        text = collapse_whitespace(text)
        if not text.strip():
            return '' if _at_block_boundary(node) else ' '

        if self.options.escape_markdown and not literal:
            text = escape_markdown(text)
            if _starts_line(node):
                text = escape_line_start(text)
        return text


class _Frame:
    """An element whose children are being converted."""

    __slots__ = ('element', 'verbatim', 'literal', 'children', 'fragments')

    def __init__(self, element: Tag, verbatim: bool, literal: bool):
        self.element = element
        self.verbatim = verbatim or element.name in _VERBATIM_TAGS
        self.literal = literal or element.name in _LITERAL_TAGS
        self.children = iter(element.contents)
        self.fragments: List[str] = []


def _join(fragments: List[str], verbatim: bool) -> str:
    """Concatenate child fragments.

    Outside preformatted text, a fragment starting a new line loses its
    leading spaces and adjacent spaces across fragments collapse to one.
    """
    if verbatim:
        return ''.join(fragments)

    joined = ''
    for fragment in fragments:
        if not fragment:
            continue
        if joined.endswith('\n') or (joined.endswith(' ') and fragment.startswith(' ')):
            fragment = fragment.lstrip(' ')
        joined += fragment
    return joined


def _is_block(node: Optional[PageElement]) -> bool:
    return isinstance(node, Tag) and node.name in BLOCK_TAGS


def _significant_sibling(node: PageElement, forward: bool) -> Optional[PageElement]:
    """Find the nearest sibling that is not blank text or a comment.

    Unwrapped layout wrappers leave runs of adjacent whitespace strings
    behind; they are skipped so the run is judged by its real neighbours.
    """
    sibling = node.next_sibling if forward else node.previous_sibling
    while isinstance(sibling, NavigableString) and (
            isinstance(sibling, PreformattedString) or not sibling.strip()):
        sibling = sibling.next_sibling if forward else sibling.previous_sibling
    return sibling


def _at_block_boundary(node: NavigableString) -> bool:
    """Check whether whitespace-only text sits next to a block edge.

    Such text is source formatting (indentation between <li> or <td>
    elements, newlines after <p>) and renders as nothing.
    """
    previous = _significant_sibling(node, forward=False)
    following = _significant_sibling(node, forward=True)
    if _is_block(previous) or _is_block(following):
        return True
    parent_is_block = _is_block(node.parent) or node.parent is None or node.parent.name == '[document]'
    return parent_is_block and (previous is None or following is None)


def _starts_line(node: NavigableString) -> bool:
    """Check whether text is the first thing rendered on its line.

    Walks back through previous siblings and inline ancestors until it
    meets content, a line break, or the edge of a block.
    """
    current: PageElement = node
    while True:
        previous = _significant_sibling(current, forward=False)
        if previous is not None:
            return _is_block(previous) or (isinstance(previous, Tag) and previous.name == 'br')
        parent = current.parent
        if parent is None or _is_block(parent) or parent.name == '[document]':
            return True
        current = parent
