"""Small text helpers shared by the WordPress client, search and feeds."""

import math
import re
from datetime import datetime

_TAG_RE = re.compile(r"<[^>]*>")

# es-MX long-date month names, indexed by ``month - 1``.
_MONTHS_ES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)

DEFAULT_WORDS_PER_MINUTE = 200


def strip_html(html: str) -> str:
    """Remove every tag from *html* and trim the result.

    Entities are left as they are.
    """
    return _TAG_RE.sub("", html or "").strip()


def format_date(date_string: str) -> str:
    """Format an ISO-8601 date as a long Spanish date (``15 de marzo de 2024``).

    Unparseable input is returned unchanged.
    """
    if not date_string:
        return ""
    raw = date_string.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return date_string
    return f"{parsed.day} de {_MONTHS_ES[parsed.month - 1]} de {parsed.year}"


def calculate_reading_time(text: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> int:
    """Estimated reading time in whole minutes (never less than one)."""
    words = len(strip_html(text).split())
    return max(1, math.ceil(words / words_per_minute))
