from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Story(BaseModel):
    headline: str = Field(description="Story or post headline")
    link: str = Field(description="A link to the post or story")
    date_posted: str = Field(description="The date the story or post was published")


class StoriesPayload(BaseModel):
    stories: List[Story] = Field(description="A list of stories related to the search terms")

    @classmethod
    def extraction_schema(cls) -> Dict[str, Any]:
        return cls.model_json_schema()


class SourceDescriptor(BaseModel):
    """A web domain, section URL or social handle the pipeline can pull from."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    kind: Literal["web", "social"] = "web"

    @field_validator("identifier")
    def validate_identifier(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Source identifier cannot be empty")
        return v.strip()


class DraftItem(BaseModel):
    """One bullet of a generated draft; older responses use headline/link."""

    description: Optional[str] = None
    story_or_tweet_link: Optional[str] = None
    headline: Optional[str] = None
    link: Optional[str] = None

    def text(self) -> str:
        return self.description or self.headline or ""

    def url(self) -> str:
        return self.story_or_tweet_link or self.link or ""

    def render(self) -> str:
        return f"• {self.text()}\n  {self.url()}"


class Trend(BaseModel):
    id: str
    date: str
    content: str
    timestamp: datetime
    keywords: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class CounterMeasure(BaseModel):
    id: str
    searchResult: str
    counterMeasure: str
    timestamp: datetime
    keywords: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
