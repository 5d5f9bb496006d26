import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from .config import get_site_name, get_wordpress_api_url, get_wordpress_timeout_s
from .routers import feeds, health, posts, search

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pooled client for the WordPress REST API per process. Tests skip
    # the lifespan and put a fake client on app.state.wordpress instead.
    api_url = get_wordpress_api_url()
    logger.info("Using WordPress API at %s", api_url)
    async with httpx.AsyncClient(
        base_url=api_url,
        timeout=get_wordpress_timeout_s(),
        headers={"User-Agent": "wpblog/0.1 (headless WordPress frontend)"},
    ) as client:
        app.state.wordpress = client
        yield


app = FastAPI(
    title="wpblog",
    description="A headless WordPress blog API: posts, search and feeds",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(posts.router)
app.include_router(search.router)
app.include_router(feeds.router)


@app.get("/")
async def root():
    return {"message": get_site_name()}
