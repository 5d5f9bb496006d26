"""WordPress REST API data source.

All functions take an ``httpx.AsyncClient`` whose ``base_url`` points at the
``/wp-json/wp/v2`` root.  The application creates one in the FastAPI
lifespan (``app.state.wordpress``); tests pass a client built on
``httpx.MockTransport``.

A failed request never propagates: it is logged and the caller gets the
empty value (``0``, ``[]`` or ``None``) so pages can still render.
"""

import logging
from typing import Any

import httpx

from ..models import Author, FeaturedImage, Post, PostSeo
from .content import process_content
from .text import format_date, strip_html

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 10
MAX_SLUGS = 100
TOTAL_HEADER = "X-WP-Total"
DEFAULT_AVATAR = "/placeholder-avatar.jpg"
AVATAR_SIZES = ("96", "48")


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------

async def _get(client: httpx.AsyncClient, path: str, params: dict[str, Any]) -> httpx.Response:
    resp = await client.get(path, params=params)
    resp.raise_for_status()
    return resp


async def get_total_posts(client: httpx.AsyncClient) -> int:
    """Number of published posts, read from the ``X-WP-Total`` header."""
    try:
        resp = await _get(client, "/posts", {"per_page": 1, "status": "publish"})
        total = resp.headers.get(TOTAL_HEADER)
        return int(total) if total else 0
    except (httpx.HTTPError, ValueError):
        logger.exception("Failed to fetch WordPress post total")
        return 0


async def get_posts(
    client: httpx.AsyncClient,
    page: int = 1,
    per_page: int = DEFAULT_PER_PAGE,
) -> list[Post]:
    """One page of published posts, transformed."""
    params = {"_embed": "true", "page": page, "per_page": per_page, "status": "publish"}
    try:
        resp = await _get(client, "/posts", params)
        return [transform_post(raw) for raw in resp.json()]
    except (httpx.HTTPError, ValueError, TypeError, KeyError):
        logger.exception("Failed to fetch WordPress posts (page=%d, per_page=%d)", page, per_page)
        return []


async def get_post_by_slug(client: httpx.AsyncClient, slug: str) -> Post | None:
    """The post with *slug*, or ``None`` when it does not exist."""
    try:
        resp = await _get(client, "/posts", {"slug": slug, "_embed": "true"})
        posts = resp.json()
        if not posts:
            return None
        return transform_post(posts[0])
    except (httpx.HTTPError, ValueError, TypeError, KeyError):
        logger.exception("Failed to fetch WordPress post by slug %r", slug)
        return None


async def get_all_post_slugs(client: httpx.AsyncClient) -> list[str]:
    """Slugs of published posts (first ``MAX_SLUGS``)."""
    params = {"per_page": MAX_SLUGS, "_fields": "slug", "status": "publish"}
    try:
        resp = await _get(client, "/posts", params)
        return [item["slug"] for item in resp.json() if item.get("slug")]
    except (httpx.HTTPError, ValueError, TypeError, KeyError):
        logger.exception("Failed to fetch WordPress post slugs")
        return []


# ---------------------------------------------------------------------------
# Transform
# ---------------------------------------------------------------------------

def _rendered(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if isinstance(value, dict):
        return value.get("rendered") or ""
    return ""


def _first(items: Any) -> dict[str, Any] | None:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return None


def _term_names(terms: Any, index: int) -> list[str]:
    if not isinstance(terms, list) or len(terms) <= index or not isinstance(terms[index], list):
        return []
    return [t["name"] for t in terms[index] if isinstance(t, dict) and t.get("name")]


def _author(raw_author: dict[str, Any] | None) -> Author:
    if raw_author is None:
        return Author()
    avatars = raw_author.get("avatar_urls") or {}
    avatar = next((avatars[size] for size in AVATAR_SIZES if avatars.get(size)), DEFAULT_AVATAR)
    return Author(name=raw_author.get("name") or "Anonymous", avatar_url=avatar)


def _featured_image(media: dict[str, Any] | None, title: str) -> FeaturedImage | None:
    # Embedded media can be an error object (e.g. rest_forbidden) without a URL.
    if media is None or not media.get("source_url"):
        return None
    details = media.get("media_details") or {}
    return FeaturedImage(
        url=media["source_url"],
        alt=media.get("alt_text") or title,
        width=details.get("width") or 1200,
        height=details.get("height") or 630,
    )


def _seo(aioseo: dict[str, Any], title: str, excerpt: str, image_url: str | None) -> PostSeo:
    og_image = aioseo.get("og_image_url") or image_url
    return PostSeo(
        title=aioseo.get("title") or title,
        description=aioseo.get("description") or excerpt,
        og_title=aioseo.get("og_title") or aioseo.get("title") or title,
        og_description=aioseo.get("og_description") or aioseo.get("description") or excerpt,
        og_image=og_image,
        twitter_title=aioseo.get("twitter_title") or aioseo.get("title") or title,
        twitter_description=(
            aioseo.get("twitter_description") or aioseo.get("description") or excerpt
        ),
        twitter_image=aioseo.get("twitter_image_url") or og_image,
    )


def transform_post(raw: dict[str, Any]) -> Post:
    """Flatten a WordPress REST post (fetched with ``_embed``) into a ``Post``.

    The body goes through the content pipeline once here; its tag-stripped
    text is stored alongside it for search.
    """
    embedded = raw.get("_embedded") or {}
    terms = embedded.get("wp:term")
    aioseo = raw.get("aioseo") if isinstance(raw.get("aioseo"), dict) else {}

    title = strip_html(_rendered(raw, "title"))
    excerpt = strip_html(_rendered(raw, "excerpt"))
    content = process_content(_rendered(raw, "content"))
    date_iso = raw.get("date") or ""
    featured_image = _featured_image(_first(embedded.get("wp:featuredmedia")), title)

    return Post(
        id=raw["id"],
        title=title,
        slug=raw.get("slug") or "",
        excerpt=excerpt,
        content=content,
        plain_text_content=strip_html(content),
        date=format_date(date_iso),
        date_iso=date_iso,
        author=_author(_first(embedded.get("author"))),
        featured_image=featured_image,
        categories=_term_names(terms, 0),
        tags=_term_names(terms, 1),
        seo=_seo(aioseo, title, excerpt, featured_image.url if featured_image else None),
    )
