"""Feeds router – RSS, sitemap and robots.txt."""

from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse

from ..config import get_base_url, get_site_description, get_site_name
from ..lib.feeds import RSS_POST_LIMIT, build_robots, build_rss, build_sitemap
from ..lib.wordpress import get_all_post_slugs, get_posts

router = APIRouter(tags=["feeds"])

XML_MEDIA_TYPE = "application/xml; charset=utf-8"
FEED_CACHE_CONTROL = "public, max-age=3600, s-maxage=3600"


@router.get("/feed.xml")
async def feed(request: Request) -> Response:
    posts = await get_posts(request.app.state.wordpress, 1, RSS_POST_LIMIT)
    body = build_rss(posts, get_base_url(), get_site_name(), get_site_description())
    return Response(
        content=body,
        media_type=XML_MEDIA_TYPE,
        headers={"Cache-Control": FEED_CACHE_CONTROL},
    )


@router.get("/sitemap.xml")
async def sitemap(request: Request) -> Response:
    slugs = await get_all_post_slugs(request.app.state.wordpress)
    return Response(content=build_sitemap(slugs, get_base_url()), media_type=XML_MEDIA_TYPE)


@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots() -> str:
    return build_robots(get_base_url())
