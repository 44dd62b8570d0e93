"""
Educational content endpoints (public, read-only).
"""
from typing import List

from fastapi import APIRouter, HTTPException

from finovo.app.schemas.content import CalculatorInfo, Topic, TopicSummary
from finovo.app.services import content_catalog

content_router = APIRouter(prefix="/content", tags=["content"])


@content_router.get("/topics", response_model=List[TopicSummary])
async def list_topics() -> List[TopicSummary]:
    return [TopicSummary(slug=t.slug, title=t.title, description=t.description) for t in content_catalog.list_topics()]


@content_router.get("/topics/{slug}", response_model=Topic)
async def get_topic(slug: str) -> Topic:
    topic = content_catalog.get_topic(slug)
    if topic is None:
        raise HTTPException(status_code=404, detail=f"Topic '{slug}' not found")
    return topic


@content_router.get("/calculators", response_model=List[CalculatorInfo])
async def list_calculators() -> List[CalculatorInfo]:
    return content_catalog.list_calculators()
