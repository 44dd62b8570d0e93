"""
Educational content schemas.
"""
from typing import List

from pydantic import BaseModel, ConfigDict


class TopicSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    description: str


class Topic(TopicSummary):
    """Topic with its full list of lessons."""
    items: List[str]


class CalculatorInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    name: str
    description: str
    endpoint: str
