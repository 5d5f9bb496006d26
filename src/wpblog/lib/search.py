"""In-memory weighted search over already transformed posts.

Scoring per query term:

* +10 when the term occurs in the title (the match is reported as a title
  match and the title is used as highlight text),
* +5 when it occurs in the excerpt (reported as an excerpt match unless a
  title match was already seen),
* +1 when it occurs in the tag-stripped body (the first body hit supplies a
  ±60 character context window if nothing else set the highlight text),
* +5 when the title starts with the term.

Posts scoring zero are dropped; the rest are sorted by score (stable, so
ties keep their input order) and capped at ``MAX_RESULTS``.
"""

import re
from typing import Sequence

from ..models import MatchedField, Post, SearchResult

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 8
CONTEXT_CHARS = 60
ELLIPSIS = "..."

TITLE_WEIGHT = 10
EXCERPT_WEIGHT = 5
CONTENT_WEIGHT = 1
TITLE_PREFIX_BONUS = 5

HIGHLIGHT_OPEN = '<mark class="search-highlight">'
HIGHLIGHT_CLOSE = "</mark>"


def _context_window(text: str, text_lower: str, term: str) -> str:
    index = text_lower.find(term)
    start = max(0, index - CONTEXT_CHARS)
    end = min(len(text_lower), index + len(term) + CONTEXT_CHARS)
    prefix = ELLIPSIS if start > 0 else ""
    suffix = ELLIPSIS if end < len(text_lower) else ""
    return f"{prefix}{text[start:end]}{suffix}"


def score_post(post: Post, terms: Sequence[str]) -> SearchResult | None:
    """Score one post against lowercased *terms*; ``None`` when nothing matches."""
    title_lower = post.title.lower()
    excerpt_lower = post.excerpt.lower()
    body = post.plain_text_content or ""
    body_lower = body.lower()

    score = 0
    matched_field = MatchedField.CONTENT
    highlighted_text = ""

    for term in terms:
        if term in title_lower:
            score += TITLE_WEIGHT
            matched_field = MatchedField.TITLE
            highlighted_text = post.title

        if term in excerpt_lower:
            score += EXCERPT_WEIGHT
            if matched_field == MatchedField.CONTENT:
                matched_field = MatchedField.EXCERPT
                highlighted_text = post.excerpt

        if term in body_lower:
            score += CONTENT_WEIGHT
            if not highlighted_text:
                highlighted_text = _context_window(body, body_lower, term)
                matched_field = MatchedField.CONTENT

        if title_lower.startswith(term):
            score += TITLE_PREFIX_BONUS

    if score == 0:
        return None
    return SearchResult(
        post=post,
        match_score=score,
        matched_field=matched_field,
        highlighted_text=highlighted_text or post.excerpt,
    )


def search(posts: Sequence[Post], query: str) -> list[SearchResult]:
    """Rank *posts* against *query*, best first, at most ``MAX_RESULTS``."""
    query = query.lower()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    terms = query.split()
    scored = [r for r in (score_post(post, terms) for post in posts) if r is not None]
    scored.sort(key=lambda r: r.match_score, reverse=True)
    return scored[:MAX_RESULTS]


def highlight(text: str, query: str) -> str:
    """Wrap every case-insensitive match of each query term in ``<mark>``.

    Terms are applied one after another to the accumulated string, so a
    later term can match inside markup inserted for an earlier one (a term
    such as ``mark`` nests markers).  That is left as is.
    """
    if not query:
        return text
    highlighted = text
    for term in query.split():
        highlighted = re.sub(
            re.escape(term),
            lambda m: f"{HIGHLIGHT_OPEN}{m.group(0)}{HIGHLIGHT_CLOSE}",
            highlighted,
            flags=re.IGNORECASE,
        )
    return highlighted
