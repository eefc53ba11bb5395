"""Rule table mapping HTML elements to markdown.

A rule pairs an element matcher with a replacement function. Replacements
receive the element together with its already-converted child content and
return the element's markdown, or None to decline so the next matching rule
gets a chance.

Confluence-specific rules (status lozenges, Jira macros, user mentions,
link cleanup) are registered as PLATFORM rules and always take precedence
over the GENERIC rules that cover plain HTML semantics.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, FrozenSet, Iterable, Iterator, Optional, Tuple

from bs4 import Tag

from .options import ConverterOptions
from .text import collapse_whitespace, looks_like_url, normalize_inline_text
from .url_cleaner import clean_url

Replacement = Callable[[Tag, str, ConverterOptions], Optional[str]]
Matcher = Callable[[Tag], bool]

# Elements that occupy their own lines; whitespace between them is layout only
BLOCK_TAGS = frozenset({
    'address', 'article', 'aside', 'blockquote', 'body', 'caption', 'center',
    'dd', 'details', 'div', 'dl', 'dt', 'fieldset', 'figcaption', 'figure',
    'footer', 'form', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'head', 'header',
    'hr', 'html', 'li', 'main', 'nav', 'ol', 'p', 'pre', 'section', 'summary',
    'table', 'tbody', 'td', 'tfoot', 'th', 'thead', 'tr', 'ul',
})

_BRUSH_RE = re.compile(r'(?:^|;)\s*brush:\s*([\w+#.-]+)')
_PLAIN_LANGUAGES = frozenset({'text', 'plain', 'none'})
_BACKTICK_RUN_RE = re.compile(r'`+')
_BLANK_LINES_RE = re.compile(r'\n\s*\n')
_UNESCAPED_PIPE_RE = re.compile(r'(?<!\\)\|')
_SEPARATOR_ROW_RE = re.compile(r'^\|(\s*:?-{3,}:?\s*\|)+$')


class RuleKind(Enum):
    """Precedence tier of a rule."""
    PLATFORM = 'platform'
    GENERIC = 'generic'


@dataclass(frozen=True)
class Rule:
    """A single element conversion rule.

    Attributes:
        name: Identifier used in logs and tests
        kind: PLATFORM rules are consulted before GENERIC ones
        tags: Tag names the rule applies to
        replacement: Produces markdown from (element, content, options),
            or None to decline
        matcher: Optional extra predicate over the element
    """
    name: str
    kind: RuleKind
    tags: FrozenSet[str]
    replacement: Replacement
    matcher: Optional[Matcher] = None

    def accepts(self, el: Tag) -> bool:
        """Check whether this rule applies to an element."""
        if el.name not in self.tags:
            return False
        return self.matcher is None or self.matcher(el)


class RuleTable:
    """Immutable, ordered collection of rules with first-match-wins lookup.

    Platform rules are moved ahead of generic rules at construction; within
    a tier, registration order is kept. The table is never modified after
    construction, so one instance can serve concurrent conversions.
    """

    def __init__(self, rules: Iterable[Rule]):
        ordered = sorted(rules, key=lambda rule: rule.kind is not RuleKind.PLATFORM)
        self._rules: Tuple[Rule, ...] = tuple(ordered)

        by_tag: Dict[str, Tuple[Rule, ...]] = {}
        for rule in self._rules:
            for tag in sorted(rule.tags):
                by_tag[tag] = by_tag.get(tag, ()) + (rule,)
        self._by_tag = by_tag

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def candidates(self, el: Tag) -> Tuple[Rule, ...]:
        """Return the rules that accept an element, in precedence order."""
        return tuple(rule for rule in self._by_tag.get(el.name, ()) if rule.accepts(el))

    def apply(self, el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
        """Run the first accepting rule that does not decline.

        Args:
            el: Element being converted
            content: Markdown of the element's children
            options: Output settings

        Returns:
            Markdown for the element, or None if no rule claimed it
        """
        for rule in self.candidates(el):
            result = rule.replacement(el, content, options)
            if result is not None:
                return result
        return None


def has_class(el: Tag, name: str) -> bool:
    """Check whether an element carries a CSS class."""
    classes = el.get('class') or []
    if isinstance(classes, str):
        classes = classes.split()
    return name in classes


def _class_matcher(name: str) -> Matcher:
    def matcher(el: Tag) -> bool:
        return has_class(el, name)
    return matcher


def _chomp(text: str) -> Tuple[str, str, str]:
    """Split text into (leading space, stripped text, trailing space)."""
    prefix = ' ' if text[:1].isspace() else ''
    suffix = ' ' if text[-1:].isspace() else ''
    return prefix, text.strip(), suffix


# ===== Platform rules =====

def _line_break(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    return '\n'


def _image(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    # Images are noise for LLM context
    return ''


def _time(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    datetime = el.get('datetime', '').strip()
    if datetime:
        return datetime
    return normalize_inline_text(content)


def _status_lozenge(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    status = normalize_inline_text(content)
    if not status:
        return ''
    return f'[{status}]'


def _jira_issue(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    """Render a Jira issue macro as its bare issue key.

    The key comes from data-jira-key on the macro itself or on the first
    descendant carrying it; the visible text is the fallback.
    """
    key = el.get('data-jira-key', '').strip()
    if not key:
        nested = el.find(attrs={'data-jira-key': True})
        if nested is not None:
            key = nested.get('data-jira-key', '').strip()
    if key:
        return key
    return normalize_inline_text(el.get_text())


def _user_mention(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    # Profile links are not resolvable outside Confluence
    return normalize_inline_text(content)


def _link(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    """Render an anchor, collapsing links whose text is the URL itself.

    The comparison with the href uses the visible text; the escaped
    content is only used as the link label.
    """
    if el.find_parent('pre') is not None:
        return content

    text = normalize_inline_text(content)
    visible = normalize_inline_text(el.get_text())
    href = el.get('href', '').strip()

    if not href or href == '#':
        return text

    if visible == href or looks_like_url(visible):
        return clean_url(href)

    if not text:
        return ''

    return f'[{text}]({_link_target(clean_url(href))})'


def _link_target(href: str) -> str:
    return href.replace(' ', '%20').replace('(', '%28').replace(')', '%29')


# ===== Generic rules =====

def _heading(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    text = normalize_inline_text(content)
    if not text:
        return ''
    level = int(el.name[1])
    return f"\n\n{'#' * level} {text}\n\n"


def _inline_wrapper(symbol_option: str, tags: FrozenSet[str]) -> Replacement:
    """Build a replacement wrapping content in a delimiter from options.

    Nested elements of the same family (<b> inside <strong>) are not wrapped
    twice, and nothing is wrapped inside a code block.
    """
    def replacement(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
        if not content.strip():
            return content
        if el.find_parent(list(tags) + ['pre']) is not None:
            return content
        symbol = getattr(options, symbol_option)
        prefix, text, suffix = _chomp(content)
        return f'{prefix}{symbol}{text}{symbol}{suffix}'
    return replacement


def _inline_code(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    if el.find_parent('pre') is not None:
        return content

    prefix, text, suffix = _chomp(collapse_whitespace(el.get_text()))
    if not text:
        return prefix or suffix

    runs = _BACKTICK_RUN_RE.findall(text)
    if runs:
        fence = '`' * (max(len(run) for run in runs) + 1)
        return f'{prefix}{fence} {text} {fence}{suffix}'
    return f'{prefix}`{text}`{suffix}'


def _code_block(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    """Render <pre> as a fenced code block of its verbatim content."""
    code = content.strip('\n')
    if not code.strip():
        return ''

    fence = options.code_fence
    while fence in code:
        fence += fence[0]

    language = _code_language(el)
    return f'\n\n{fence}{language}\n{code}\n{fence}\n\n'


def _code_language(el: Tag) -> str:
    """Detect the language of a code block.

    Confluence code macros store it as a brush in data-syntaxhighlighter-params
    (e.g. "brush: java; gutter: false"); other HTML uses a language-* class.
    """
    params = el.get('data-syntaxhighlighter-params', '')
    match = _BRUSH_RE.search(params)
    if match:
        language = match.group(1).lower()
        return '' if language in _PLAIN_LANGUAGES else language

    candidates = [el]
    code = el.find('code')
    if code is not None:
        candidates.append(code)
    for candidate in candidates:
        for css_class in candidate.get('class') or []:
            if css_class.startswith('language-'):
                return css_class[len('language-'):]
    return ''


def _block(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    text = content.strip()
    if not text:
        return ''
    return f'\n\n{text}\n\n'


def _blockquote(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    text = content.strip()
    if not text:
        return ''
    text = re.sub(r'\n{3,}', '\n\n', text)
    lines = [f'> {line}' if line else '>' for line in text.split('\n')]
    return '\n\n' + '\n'.join(lines) + '\n\n'


def _horizontal_rule(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    return '\n\n---\n\n'


def _list(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    text = content.strip('\n')
    if not text.strip():
        return ''
    if el.parent is not None and el.parent.name == 'li':
        return f'\n{text}\n'
    return f'\n\n{text}\n\n'


def _list_item(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    """Render a list item, indenting continuation lines under its marker."""
    marker = _list_marker(el, options)
    text = _BLANK_LINES_RE.sub('\n', content.strip())
    lines = text.split('\n')
    indent = ' ' * (len(marker) + 1)

    item = f'{marker} {lines[0]}'.rstrip() + '\n'
    for line in lines[1:]:
        item += (indent + line if line.strip() else '') + '\n'
    return item


def _list_marker(el: Tag, options: ConverterOptions) -> str:
    parent = el.parent
    if parent is None or parent.name != 'ol':
        return options.bullet_marker

    try:
        start = int(parent.get('start', '1'))
    except ValueError:
        start = 1
    position = len(el.find_previous_siblings('li'))
    return f'{start + position}.'


def _colspan(el: Tag) -> int:
    colspan = el.get('colspan', '')
    if colspan.isdigit():
        return max(1, min(1000, int(colspan)))
    return 1


def _table_cell(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    """Render a cell on a single line.

    Line breaks, paragraphs and list items inside the cell are joined with
    the configured separator; pipes are escaped so the column count holds.
    """
    lines = [line.strip() for line in content.split('\n')]
    text = options.table_cell_separator.join(line for line in lines if line)
    text = _UNESCAPED_PIPE_RE.sub(r'\\|', text)
    return ' ' + text + ' |' * _colspan(el)


def _table_row(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    cells = content.strip('\n')
    if not cells.strip():
        return ''

    row = '|' + cells + '\n'
    if _is_first_row(el):
        columns = sum(_colspan(cell) for cell in el.find_all(['td', 'th'], recursive=False))
        row += '|' + ' --- |' * max(columns, 1) + '\n'
    return row


def _is_first_row(el: Tag) -> bool:
    """Check whether a row is the first row of its table that has cells."""
    table = el.find_parent('table')
    if table is None:
        return False
    for row in table.descendants:
        if isinstance(row, Tag) and row.name == 'tr' and row.find(['td', 'th'], recursive=False) is not None:
            return row is el
    return False


def _table(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    body = content.strip()
    if not body:
        return ''

    if el.find_parent(['td', 'th']) is not None:
        return '\n' + _flatten_nested_table(body) + '\n'

    caption = el.find('caption', recursive=False)
    title = normalize_inline_text(caption.get_text()) if caption is not None else ''
    if title:
        return f'\n\n{title}\n\n{body}\n\n'
    return f'\n\n{body}\n\n'


def _flatten_nested_table(body: str) -> str:
    """Turn pipe rows into comma-joined lines that fit inside a cell."""
    lines = []
    for line in body.split('\n'):
        line = line.strip()
        if not line or _SEPARATOR_ROW_RE.match(line):
            continue
        cells = [cell.strip() for cell in _UNESCAPED_PIPE_RE.split(line.strip('|'))]
        text = ', '.join(cell.replace('\\|', '|') for cell in cells if cell)
        if text:
            lines.append(text)
    return '\n'.join(lines)


def _drop(el: Tag, content: str, options: ConverterOptions) -> Optional[str]:
    return ''


PLATFORM_RULES: Tuple[Rule, ...] = (
    Rule('line-break', RuleKind.PLATFORM, frozenset({'br'}), _line_break),
    Rule('image', RuleKind.PLATFORM, frozenset({'img'}), _image),
    Rule('time', RuleKind.PLATFORM, frozenset({'time'}), _time),
    Rule('status-lozenge', RuleKind.PLATFORM, frozenset({'span'}), _status_lozenge,
         matcher=_class_matcher('status-macro')),
    Rule('jira-issue', RuleKind.PLATFORM, frozenset({'span'}), _jira_issue,
         matcher=_class_matcher('confluence-jim-macro')),
    Rule('user-mention', RuleKind.PLATFORM, frozenset({'a'}), _user_mention,
         matcher=_class_matcher('confluence-userlink')),
    Rule('link', RuleKind.PLATFORM, frozenset({'a'}), _link),
)

_STRONG_TAGS = frozenset({'strong', 'b'})
_EM_TAGS = frozenset({'em', 'i', 'cite'})
_STRIKE_TAGS = frozenset({'del', 's', 'strike'})

GENERIC_RULES: Tuple[Rule, ...] = (
    Rule('heading', RuleKind.GENERIC, frozenset({'h1', 'h2', 'h3', 'h4', 'h5', 'h6'}), _heading),
    Rule('strong', RuleKind.GENERIC, _STRONG_TAGS, _inline_wrapper('strong_symbol', _STRONG_TAGS)),
    Rule('emphasis', RuleKind.GENERIC, _EM_TAGS, _inline_wrapper('em_symbol', _EM_TAGS)),
    Rule('strikethrough', RuleKind.GENERIC, _STRIKE_TAGS, _inline_wrapper('strike_symbol', _STRIKE_TAGS)),
    Rule('inline-code', RuleKind.GENERIC, frozenset({'code', 'kbd', 'samp', 'tt'}), _inline_code),
    Rule('code-block', RuleKind.GENERIC, frozenset({'pre'}), _code_block),
    Rule('blockquote', RuleKind.GENERIC, frozenset({'blockquote'}), _blockquote),
    Rule('horizontal-rule', RuleKind.GENERIC, frozenset({'hr'}), _horizontal_rule),
    Rule('list', RuleKind.GENERIC, frozenset({'ul', 'ol'}), _list),
    Rule('list-item', RuleKind.GENERIC, frozenset({'li'}), _list_item),
    Rule('table-cell', RuleKind.GENERIC, frozenset({'td', 'th'}), _table_cell),
    Rule('table-row', RuleKind.GENERIC, frozenset({'tr'}), _table_row),
    Rule('table-caption', RuleKind.GENERIC, frozenset({'caption'}), _drop),
    Rule('table', RuleKind.GENERIC, frozenset({'table'}), _table),
    Rule('block', RuleKind.GENERIC, frozenset({
        'address', 'article', 'aside', 'center', 'dd', 'details', 'div', 'dl',
        'dt', 'fieldset', 'figcaption', 'figure', 'footer', 'form', 'header',
        'main', 'nav', 'p', 'section', 'summary',
    }), _block),
    Rule('non-content', RuleKind.GENERIC, frozenset({
        'head', 'noscript', 'script', 'style', 'template',
    }), _drop),
)


def default_rule_table() -> RuleTable:
    """Build the rule table used by the converter."""
    return RuleTable(PLATFORM_RULES + GENERIC_RULES)
