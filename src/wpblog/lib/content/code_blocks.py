"""Rewriter for Code Block Pro markup.

The Code Block Pro WordPress plugin renders each block as a
``div.wp-block-kevinbatdorf-code-block-pro`` holding a title bar or a
window-dots SVG, a copy button with a hidden ``<textarea>`` of the raw code,
and a Shiki-highlighted ``<pre><code>`` whose spans carry inline colors.
Each block is rebuilt as::

    <div class="wp-block-code-block-pro" ...>
      <div class="code-block-header">
        <span class="code-language">Label</span>
        <span role="button" aria-label="Copy" data-code="...">...</span>
      </div>
      <pre>...</pre>
    </div>

so the site stylesheet controls colors and the copy handler only has to read
``data-code``.
"""

import html
import logging
import re
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from .placeholders import PlaceholderStore

logger = logging.getLogger(__name__)

CODE_BLOCK_CLASS = "wp-block-kevinbatdorf-code-block-pro"
REWRITTEN_CLASS = "wp-block-code-block-pro"
FONT_FAMILY_ATTR = "data-code-block-pro-font-family"
FONT_FAMILY_PREFIX = "Code-Pro-"
DEFAULT_LABEL = "Code"

# Container attributes that are dropped from the rewritten tag.
_DROPPED_CONTAINER_ATTRS = frozenset({"class", "style", FONT_FAMILY_ATTR})

# Checked in order, first hit wins.
LANGUAGE_HINTS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("git ",), "Bash"),
    (("npm ", "pnpm "), "Shell"),
    (("function", "const "), "JavaScript"),
    (("interface", "type "), "TypeScript"),
    (("<?php",), "PHP"),
    (("def ", "import "), "Python"),
)

# Font choices offered by the plugin; they say nothing about the language.
# Fonts missing from this list are still caught by GENERIC_FONT_WORDS.
GENERIC_FONT_LABELS = frozenset({
    "cascadia code",
    "code",
    "comic mono",
    "default",
    "fira code",
    "geist mono",
    "hack",
    "ibm plex mono",
    "iosevka",
    "jetbrains mono",
    "monaspace argon",
    "monaspace krypton",
    "monaspace neon",
    "monaspace radon",
    "monaspace xenon",
    "monospace",
    "roboto mono",
    "source code pro",
    "ubuntu mono",
    "victor mono",
})

# A label containing one of these words names a typeface, not a language.
GENERIC_FONT_WORDS = frozenset({"mono", "code"})

_TITLE_TRANSLATION = str.maketrans({"“": '"', "”": '"'})

COPY_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" style="width:24px;height:24px" '
    'fill="none" viewBox="0 0 24 24" stroke="currentColor" stroke-width="2">'
    '<path class="with-check" stroke-linecap="round" stroke-linejoin="round" '
    'd="M9 5H7a2 2 0 00-2 2v12a2 2 0 002 2h10a2 2 0 002-2V7a2 2 0 00-2-2h-2'
    'M9 5a2 2 0 002 2h2a2 2 0 002-2M9 5a2 2 0 012-2h2a2 2 0 012 2m-6 9l2 2 4-4"></path>'
    '<path class="without-check" stroke-linecap="round" stroke-linejoin="round" '
    'd="M9 5H7a2 2 0 00-2 2v12a2 2 0 002 2h10a2 2 0 002-2V7a2 2 0 00-2-2h-2'
    'M9 5a2 2 0 002 2h2a2 2 0 002-2M9 5a2 2 0 012-2h2a2 2 0 012 2"></path></svg>'
)

# Opening tag of an emitted copy button; `"` never occurs inside data-code.
COPY_BUTTON_RE = re.compile(r'<span role="button" aria-label="Copy" data-code="[^"]*">')


@dataclass
class CodeBlockFragment:
    """What is pulled out of one plugin container before it is re-emitted."""

    attributes: str
    extra_classes: list[str]
    custom_title: str
    detected_language: str
    code_for_copy: str
    code_block_markup: str

    @property
    def label(self) -> str:
        return self.custom_title or self.detected_language or DEFAULT_LABEL

    def render(self) -> str:
        language = f'<span class="code-language">{html.escape(self.label, quote=False)}</span>'
        copy_button = ""
        if self.code_for_copy:
            data_code = self.code_for_copy.replace('"', "&quot;")
            copy_button = (
                f'<span role="button" aria-label="Copy" data-code="{data_code}">'
                f"{COPY_ICON}</span>"
            )
        header = f'<div class="code-block-header">{language}{copy_button}</div>'
        classes = " ".join([REWRITTEN_CLASS, *self.extra_classes])
        return (
            f'<div class="{classes}"{self.attributes}>'
            f"{header}{self.code_block_markup}</div>"
        )


def detect_language(code: str) -> str | None:
    """Guess a language label from characteristic tokens in *code*."""
    for tokens, language in LANGUAGE_HINTS:
        if any(token in code for token in tokens):
            return language
    return None


def font_family_label(container: Tag) -> str:
    """``Code-Pro-JavaScript`` → ``JavaScript``; empty when the attribute is missing."""
    raw = container.get(FONT_FAMILY_ATTR) or ""
    if isinstance(raw, list):
        raw = " ".join(raw)
    return raw.replace(FONT_FAMILY_PREFIX, "", 1).replace("-", " ").strip()


def _is_generic_label(label: str) -> bool:
    if not label:
        return True
    lowered = label.lower()
    return lowered in GENERIC_FONT_LABELS or not GENERIC_FONT_WORDS.isdisjoint(lowered.split())


def is_code_block(tag: Tag) -> bool:
    return tag.name == "div" and CODE_BLOCK_CLASS in (tag.get("class") or [])


def find_code_blocks(soup: BeautifulSoup) -> list[Tag]:
    """Outermost plugin containers in document order."""
    return [
        tag for tag in soup.find_all(is_code_block)
        if tag.find_parent(is_code_block) is None
    ]


def _extract_custom_title(container: Tag) -> str:
    title_bar = container.find(
        lambda t: t.name == "span" and "border-bottom" in (t.get("style") or "")
    )
    if title_bar is None:
        return ""
    title = title_bar.get_text().strip().translate(_TITLE_TRANSLATION)
    title_bar.decompose()
    return title


def _textarea_text(container: Tag) -> str:
    textarea = container.find("textarea")
    return textarea.get_text() if textarea is not None else ""


def _remove_decorations(container: Tag) -> None:
    for button in container.find_all("span", role="button"):
        if not button.decomposed:
            button.decompose()
    for svg in container.find_all("svg"):
        if svg.decomposed or svg.find_parent("pre") is not None:
            continue
        holder = svg.parent
        if holder is container or holder is None or holder.name != "span":
            holder = svg
        holder.decompose()


def _strip_span_styles(pre: Tag) -> None:
    for span in pre.find_all("span"):
        span.attrs.pop("style", None)


def _code_text(pre: Tag | None) -> str:
    if pre is None:
        return ""
    code = pre.find("code")
    return (code if code is not None else pre).get_text()


def _render_attributes(container: Tag) -> str:
    parts = []
    for name, value in container.attrs.items():
        if name in _DROPPED_CONTAINER_ATTRS:
            continue
        if isinstance(value, list):
            value = " ".join(value)
        parts.append(f' {name}="{html.escape(value, quote=True)}"')
    return "".join(parts)


def build_fragment(container: Tag) -> CodeBlockFragment:
    """Pull title, language, copy text and cleaned ``<pre>`` out of *container*.

    The container subtree is modified in place.  Nothing here raises: a
    missing piece degrades to an empty value or the default label.
    """
    custom_title = _extract_custom_title(container)
    code_for_copy = _textarea_text(container)
    _remove_decorations(container)

    pre = container.find("pre")
    if pre is not None:
        _strip_span_styles(pre)
    if not code_for_copy:
        code_for_copy = _code_text(pre)

    detected_language = ""
    if not custom_title:
        detected_language = font_family_label(container)
        if _is_generic_label(detected_language):
            detected_language = detect_language(code_for_copy) or DEFAULT_LABEL

    return CodeBlockFragment(
        attributes=_render_attributes(container),
        extra_classes=[c for c in container.get("class") or [] if c != CODE_BLOCK_CLASS],
        custom_title=custom_title,
        detected_language=detected_language,
        code_for_copy=code_for_copy,
        code_block_markup=str(pre) if pre is not None else "<pre></pre>",
    )


def protect_code_blocks(soup: BeautifulSoup, store: PlaceholderStore) -> int:
    """Replace every plugin container in *soup* with a placeholder.

    The rewritten markup for each container is recorded in *store*.
    Returns the number of containers rewritten.
    """
    containers = find_code_blocks(soup)
    for container in containers:
        fragment = build_fragment(container)
        container.replace_with(store.protect(fragment.render()))
    if containers:
        logger.debug("Rewrote %d code block(s)", len(containers))
    return len(containers)


def rewrite_code_blocks(html_text: str) -> str:
    """Rewrite every Code Block Pro container in *html_text*.

    Input without containers is returned unchanged.
    """
    if not html_text or CODE_BLOCK_CLASS not in html_text:
        return html_text or ""
    soup = BeautifulSoup(html_text, "html.parser")
    store = PlaceholderStore("CODE_BLOCK", html_text)
    if not protect_code_blocks(soup, store):
        return html_text
    return store.restore(str(soup))
