"""Placeholder protection for destructive string transforms.

A region of a document is swapped for a sentinel token, the transform runs
over the rest of the document, and the original region is put back.  Each
store picks a random nonce that does not occur in the document it protects,
so a sentinel can never be confused with real content, and counts its own
placeholders so concurrent calls share nothing.
"""

from uuid import uuid4


class PlaceholderStore:
    """Ordered (placeholder, original) pairs for one document."""

    def __init__(self, label: str, document: str):
        nonce = uuid4().hex
        while nonce in document:
            nonce = uuid4().hex
        self._prefix = f"___{label}_{nonce}_"
        self._regions: list[tuple[str, str]] = []

    def __len__(self) -> int:
        return len(self._regions)

    def protect(self, content: str) -> str:
        """Record *content* and return the placeholder that stands in for it."""
        placeholder = f"{self._prefix}{len(self._regions)}___"
        self._regions.append((placeholder, content))
        return placeholder

    def restore(self, text: str) -> str:
        """Put every recorded region back in place of its placeholder.

        Regions are restored newest first: a region recorded later may
        contain the placeholder of an earlier one.
        """
        for placeholder, content in reversed(self._regions):
            text = text.replace(placeholder, content, 1)
        return text
