from enum import Enum

from pydantic import BaseModel, Field, model_validator

from .lib.text import strip_html


class Author(BaseModel):
    name: str = Field("Anonymous", description="Display name of the post author")
    avatar_url: str = Field(
        "/placeholder-avatar.jpg", description="URL of the author's avatar image"
    )


class FeaturedImage(BaseModel):
    url: str
    alt: str = ""
    width: int = 1200
    height: int = 630


class PostSeo(BaseModel):
    """SEO bundle taken from the All in One SEO extension, with fallbacks."""

    title: str | None = None
    description: str | None = None
    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None
    twitter_title: str | None = None
    twitter_description: str | None = None
    twitter_image: str | None = None


class Post(BaseModel):
    """A WordPress post flattened into a render-ready shape."""

    id: int
    title: str = Field(..., description="Post title with tags stripped")
    slug: str
    excerpt: str = Field("", description="Excerpt with tags stripped")
    content: str = Field("", description="Sanitized, rewritten and minified HTML")
    plain_text_content: str | None = Field(
        None,
        description="Tag-stripped copy of `content`, computed once for search",
    )
    date: str = Field("", description="Human readable publication date")
    date_iso: str = Field("", description="Original ISO-8601 date from WordPress")
    author: Author = Field(default_factory=Author)
    featured_image: FeaturedImage | None = None
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    seo: PostSeo | None = None

    @model_validator(mode="after")
    def _sync_plain_text(self) -> "Post":
        expected = strip_html(self.content)
        if self.plain_text_content is None:
            self.plain_text_content = expected
        elif self.plain_text_content != expected:
            raise ValueError("plain_text_content must equal the tag-stripped content")
        return self


class MatchedField(str, Enum):
    TITLE = "title"
    EXCERPT = "excerpt"
    CONTENT = "content"


class SearchResult(BaseModel):
    """A post scored against a search query."""

    post: Post
    match_score: int
    matched_field: MatchedField
    highlighted_text: str
