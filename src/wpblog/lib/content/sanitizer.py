"""Strip scripts and inline event handlers from WordPress HTML."""

import re

from bs4 import BeautifulSoup
from bs4.element import PreformattedString

_SCRIPT_OPEN_RE = re.compile(r"<script", re.IGNORECASE)


def _is_event_handler(attr: str) -> bool:
    return attr.lower().startswith("on") and len(attr) > 2


def _remove_scripts(soup: BeautifulSoup) -> None:
    for tag in soup.find_all("script"):
        if not tag.decomposed:
            tag.decompose()

    # Comments, declarations and <style> bodies are serialized verbatim.
    for node in soup.find_all(string=_SCRIPT_OPEN_RE):
        if isinstance(node, PreformattedString) or (
            node.parent is not None and node.parent.name == "style"
        ):
            node.extract()


def _remove_unsafe_attributes(soup: BeautifulSoup) -> None:
    for tag in soup.find_all(True):
        for attr in [a for a in tag.attrs if _is_event_handler(a) or "<" in a]:
            del tag[attr]


def sanitize(html: str) -> str:
    """Remove every ``<script>`` element and every ``on*`` attribute.

    The rest of the markup is kept; the output is the re-serialized parse
    tree, so equivalent markup may come back normalized (``<br>`` becomes
    ``<br/>``).  Malformed input is handled best-effort and never raises.
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")
    # html.parser accepts tag names such as "a<script"; keep their children only.
    for tag in soup.find_all(lambda t: "<" in t.name):
        tag.unwrap()
    _remove_scripts(soup)
    _remove_unsafe_attributes(soup)
    return str(soup)
