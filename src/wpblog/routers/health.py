from fastapi import APIRouter
from pydantic import BaseModel

from ..config import get_site_name

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    site: str


@router.get("/health", response_model=HealthResponse, status_code=200)
async def healthcheck():
    return {"status": "ok", "site": get_site_name()}
