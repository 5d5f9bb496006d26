"""RSS, sitemap and robots.txt builders."""

import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Sequence

from ..models import Post

RSS_POST_LIMIT = 50
ATOM_NS = "http://www.w3.org/2005/Atom"
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
FEED_LANGUAGE = "es-MX"

DISALLOWED_PATHS = ("/api/", "/admin/")
# Crawlers that fetch Open Graph previews.
SOCIAL_CRAWLERS = (
    "facebookexternalhit",
    "Facebot",
    "Twitterbot",
    "LinkedInBot",
    "WhatsApp",
    "Slackbot",
    "TelegramBot",
)


def _rfc822(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def _pub_date(date_iso: str) -> str | None:
    raw = date_iso.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return _rfc822(datetime.fromisoformat(raw))
    except ValueError:
        return None


def _sub(parent: ET.Element, tag: str, text: str | None = None, **attrib: str) -> ET.Element:
    el = ET.SubElement(parent, tag, attrib)
    if text is not None:
        el.text = text
    return el


def _serialize(root: ET.Element) -> str:
    ET.indent(root)
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + ET.tostring(root, encoding="unicode")


def build_rss(
    posts: Sequence[Post],
    base_url: str,
    title: str,
    description: str,
    now: datetime | None = None,
) -> str:
    """RSS 2.0 document for *posts* (the caller passes the newest first)."""
    ET.register_namespace("atom", ATOM_NS)
    rss = ET.Element("rss", {"version": "2.0"})
    channel = _sub(rss, "channel")
    _sub(channel, "title", title)
    _sub(channel, "link", base_url)
    _sub(channel, "description", description)
    _sub(channel, "language", FEED_LANGUAGE)
    _sub(channel, "lastBuildDate", _rfc822(now or datetime.now(timezone.utc)))
    _sub(
        channel,
        f"{{{ATOM_NS}}}link",
        href=f"{base_url}/feed.xml",
        rel="self",
        type="application/rss+xml",
    )

    for post in posts[:RSS_POST_LIMIT]:
        url = f"{base_url}/posts/{post.slug}"
        item = _sub(channel, "item")
        _sub(item, "title", post.title)
        _sub(item, "link", url)
        _sub(item, "description", post.excerpt)
        pub_date = _pub_date(post.date_iso)
        if pub_date:
            _sub(item, "pubDate", pub_date)
        _sub(item, "guid", url, isPermaLink="true")
        _sub(item, "author", post.author.name)
        for category in post.categories:
            _sub(item, "category", category)

    return _serialize(rss)


def build_sitemap(slugs: Sequence[str], base_url: str, now: datetime | None = None) -> str:
    """Sitemap with the home page (daily) followed by every post (weekly)."""
    lastmod = (now or datetime.now(timezone.utc)).date().isoformat()
    urlset = ET.Element("urlset", {"xmlns": SITEMAP_NS})

    entries = [(base_url, "daily", "1.0")]
    entries += [(f"{base_url}/posts/{slug}", "weekly", "0.8") for slug in slugs]
    for loc, changefreq, priority in entries:
        url = _sub(urlset, "url")
        _sub(url, "loc", loc)
        _sub(url, "lastmod", lastmod)
        _sub(url, "changefreq", changefreq)
        _sub(url, "priority", priority)

    return _serialize(urlset)


def build_robots(base_url: str) -> str:
    lines = ["User-Agent: *", "Allow: /"]
    lines += [f"Disallow: {path}" for path in DISALLOWED_PATHS]
    lines.append("")
    lines += [f"User-Agent: {agent}" for agent in SOCIAL_CRAWLERS]
    lines.append("Allow: /")
    lines.append("")
    lines.append(f"Sitemap: {base_url}/sitemap.xml")
    return "\n".join(lines) + "\n"
