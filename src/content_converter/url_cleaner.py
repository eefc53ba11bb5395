"""Hyperlink cleanup for Confluence tracking parameters.

Confluence decorates links with analytics and origin markers that carry no
meaning outside the browser session. clean_url() drops them and rewrites the
remaining query in a stable order so the same link always renders the same.
"""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

# Query parameters added by Confluence for origin/referral tracking
TRACKING_PARAMS = frozenset({
    'atlOrigin',
    'focusedCommentId',
    'src',
})


def clean_url(raw: str) -> str:
    """Remove tracking query parameters from a URL.

    Unparseable URLs are returned unchanged; cleanup never fails a
    conversion. The function is idempotent.

    Args:
        raw: Link target as found in the HTML

    Returns:
        URL without tracking parameters, query pairs sorted by key

    Example:
        >>> clean_url("https://e.com/p?atlOrigin=x&keep=1")
        'https://e.com/p?keep=1'
    """
    try:
        parts = urlsplit(raw.strip())
        pairs = parse_qsl(parts.query, keep_blank_values=True)
    except ValueError:
        return raw

    kept = [(key, value) for key, value in pairs if key not in TRACKING_PARAMS]
    # Stable sort: values of a repeated key keep their relative order
    kept.sort(key=lambda pair: pair[0])
    query = urlencode(kept)

    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))
