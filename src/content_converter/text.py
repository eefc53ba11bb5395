"""Text helpers shared by the preprocessor, rules and engine."""

import re

_WHITESPACE_RE = re.compile(r"\s+")
_ESCAPE_RE = re.compile(r"([\\`*_\[\]])")
_URL_PREFIXES = ("http://", "https://", "/")
# Tokens that open a heading, list item, thematic break or quote at line start
_BLOCK_MARKER_RE = re.compile(r"^(\s*)(#{1,6}(?=\s|$)|-{3,}(?=\s*$)|[-+*](?=\s|$)|>)")
_ORDERED_MARKER_RE = re.compile(r"^(\s*\d{1,9})([.)])(?=\s|$)")


def normalize_inline_text(text: str) -> str:
    """Collapse whitespace runs (including non-breaking spaces) and trim.

    Args:
        text: Raw or converted text

    Returns:
        Text with single ASCII spaces between words
    """
    return _WHITESPACE_RE.sub(" ", text).strip()


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to a single space without trimming."""
    return _WHITESPACE_RE.sub(" ", text)


def looks_like_url(value: str) -> bool:
    """Check whether text is a bare absolute URL or site-relative path.

    Args:
        value: Candidate text

    Returns:
        True if value has no whitespace and starts with http://, https:// or /
    """
    value = value.strip()
    if not value or _WHITESPACE_RE.search(value):
        return False
    return value.startswith(_URL_PREFIXES)


def escape_markdown(text: str) -> str:
    """Backslash-escape markdown control characters in prose.

    Tokens that look like URLs are left untouched so links stay usable and
    anchor text can still be compared against its href.

    Args:
        text: Text run with whitespace already collapsed

    Returns:
        Escaped text
    """
    parts = _WHITESPACE_RE.split(text)
    separators = _WHITESPACE_RE.findall(text)
    escaped = []
    for index, token in enumerate(parts):
        if token and not looks_like_url(token):
            token = _ESCAPE_RE.sub(r"\\\1", token)
        escaped.append(token)
        if index < len(separators):
            escaped.append(separators[index])
    return "".join(escaped)


def escape_line_start(text: str) -> str:
    """Escape a leading token markdown would read as block syntax.

    Covers ATX heading markers, bullets, ordered list numbers, thematic
    breaks and blockquote markers.

    Args:
        text: Escaped text that begins a rendered line

    Returns:
        Text whose leading marker is backslash-escaped
    """
    match = _ORDERED_MARKER_RE.match(text)
    if match:
        return f"{match.group(1)}\\{match.group(2)}{text[match.end():]}"
    return _BLOCK_MARKER_RE.sub(r"\1\\\2", text, count=1)
