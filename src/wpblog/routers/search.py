"""Search router – weighted search over one page of posts.

The scorer runs in memory against the posts of the requested page, the
same list the article index shows, and highlights query terms in the
title and snippet of every result.
"""

from fastapi import APIRouter, Query, Request
from pydantic import BaseModel

from ..lib.search import highlight, search
from ..lib.wordpress import DEFAULT_PER_PAGE, get_posts
from ..models import MatchedField

router = APIRouter(tags=["search"])


class SearchHit(BaseModel):
    id: int
    slug: str
    date: str
    match_score: int
    matched_field: MatchedField
    highlighted_title: str
    highlighted_text: str


class SearchResponse(BaseModel):
    query: str
    results: list[SearchHit]


@router.get("/search", response_model=SearchResponse)
async def search_posts(
    request: Request,
    q: str = Query(..., description="Search query; fewer than 2 characters returns nothing"),
    page: int = Query(1, ge=1),
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=100),
) -> SearchResponse:
    posts = await get_posts(request.app.state.wordpress, page, per_page)
    hits = [
        SearchHit(
            id=result.post.id,
            slug=result.post.slug,
            date=result.post.date,
            match_score=result.match_score,
            matched_field=result.matched_field,
            highlighted_title=highlight(result.post.title, q),
            highlighted_text=highlight(result.highlighted_text, q),
        )
        for result in search(posts, q)
    ]
    return SearchResponse(query=q, results=hits)
