"""Posts router – paginated article list and single-article view.

GET /posts
    One page of posts plus pagination info.

GET /posts/{slug}
    A single post with its estimated reading time.
"""

import asyncio
import logging
import math

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel, Field

from ..lib.text import calculate_reading_time
from ..lib.wordpress import DEFAULT_PER_PAGE, get_post_by_slug, get_posts, get_total_posts
from ..models import Post

router = APIRouter(tags=["posts"])

logger = logging.getLogger(__name__)


class PostListResponse(BaseModel):
    posts: list[Post]
    page: int
    per_page: int
    total_posts: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


class PostDetailResponse(BaseModel):
    post: Post
    reading_time: int = Field(..., description="Estimated reading time in minutes")


@router.get("/posts", response_model=PostListResponse)
async def posts_list(
    request: Request,
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=100),
) -> PostListResponse:
    """Return one page of published posts.

    When WordPress is unreachable the list is empty rather than an error.
    """
    client = request.app.state.wordpress
    posts, total_posts = await asyncio.gather(
        get_posts(client, page, per_page),
        get_total_posts(client),
    )
    if not posts:
        logger.warning("No posts returned for page %d", page)

    total_pages = math.ceil(total_posts / per_page)
    return PostListResponse(
        posts=posts,
        page=page,
        per_page=per_page,
        total_posts=total_posts,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


@router.get("/posts/{slug}", response_model=PostDetailResponse)
async def posts_detail(request: Request, slug: str) -> PostDetailResponse:
    post = await get_post_by_slug(request.app.state.wordpress, slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return PostDetailResponse(post=post, reading_time=calculate_reading_time(post.content))
