"""WordPress content pipeline.

Stage order matters: code blocks are rewritten and swapped for placeholders
before the global style strip so their retained markup survives it, and the
minifier runs last so it never sees code whitespace outside a protected tag.
"""

from bs4 import BeautifulSoup

from .code_blocks import COPY_BUTTON_RE, protect_code_blocks
from .minifier import minify
from .placeholders import PlaceholderStore
from .sanitizer import sanitize

PRESENTATIONAL_ATTRS = ("style", "color")


def strip_presentational_attributes(soup: BeautifulSoup) -> None:
    """Drop inline ``style`` and ``color`` attributes from every tag in *soup*."""
    for tag in soup.find_all(True):
        for attr in PRESENTATIONAL_ATTRS:
            tag.attrs.pop(attr, None)


def process_content(raw_html: str) -> str:
    """Turn ``content.rendered`` into trusted, render-ready HTML.

    sanitize → rewrite code blocks → strip remaining inline styles/colors →
    restore code blocks → minify.
    """
    if not raw_html:
        return ""

    html = sanitize(raw_html)
    soup = BeautifulSoup(html, "html.parser")
    code_blocks = PlaceholderStore("CODE_BLOCK", html)
    protect_code_blocks(soup, code_blocks)
    strip_presentational_attributes(soup)
    html = code_blocks.restore(str(soup))

    # data-code must reach the clipboard with its whitespace intact.
    return minify(html, protect=(COPY_BUTTON_RE,))
