"""HTML minifier that leaves whitespace-significant regions alone.

``<pre>``, ``<code>``, ``<textarea>`` and ``<script>`` regions are swapped
for placeholders before any whitespace is touched and put back afterwards,
byte for byte.
"""

import re
from typing import Iterable, Pattern

from .placeholders import PlaceholderStore

PROTECTED_TAG_RE = re.compile(
    r"<(pre|code|textarea|script)\b[^>]*>[\s\S]*?</\1>", re.IGNORECASE
)

# Applied in order; the chain is repeated until the text stops changing so
# that minify(minify(x)) == minify(x).  Only ASCII whitespace collapses:
# a decoded &nbsp; (U+00A0) is content.
_MINIFY_STEPS: tuple[tuple[Pattern[str], str], ...] = (
    # comments, except IE conditional comments
    (re.compile(r"<!--(?!\[if\s)[\s\S]*?-->", re.ASCII), ""),
    (re.compile(r">\s+<", re.ASCII), "><"),
    (re.compile(r"^\s+", re.MULTILINE | re.ASCII), ""),
    (re.compile(r"\s+$", re.MULTILINE | re.ASCII), ""),
    (re.compile(r"\s{2,}", re.ASCII), " "),
    (re.compile(r"\s*=\s*", re.ASCII), "="),
    (re.compile(r"\n\s*\n", re.ASCII), "\n"),
)

_ASCII_WHITESPACE = " \t\n\r\f\v"


def _collapse(html: str) -> str:
    while True:
        collapsed = html
        for pattern, replacement in _MINIFY_STEPS:
            collapsed = pattern.sub(replacement, collapsed)
        collapsed = collapsed.strip(_ASCII_WHITESPACE)
        if collapsed == html:
            return collapsed
        html = collapsed


def minify(html: str, protect: Iterable[Pattern[str]] = ()) -> str:
    """Collapse comments and whitespace in *html*.

    *protect* adds patterns whose matches are shielded the same way as the
    whitespace-significant tags.
    """
    if not html:
        return ""

    store = PlaceholderStore("PROTECTED", html)
    shielded = html
    # Extra patterns go first: they may cover attribute text that looks like
    # one of the protected tags.
    for pattern in protect:
        shielded = pattern.sub(lambda m: store.protect(m.group(0)), shielded)
    shielded = PROTECTED_TAG_RE.sub(lambda m: store.protect(m.group(0)), shielded)

    return store.restore(_collapse(shielded))
