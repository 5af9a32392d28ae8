from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ArticleSource(BaseModel):
    """Feed an article originates from."""
    title: Optional[str] = None
    website: Optional[str] = None


class Article(BaseModel):
    """Normalized article as presented to the swipe interface."""
    id: str
    title: str = ""
    summary: str = "No summary available"
    url: Optional[str] = None
    published: Optional[datetime] = None
    author: Optional[str] = None
    source: ArticleSource = Field(default_factory=ArticleSource)
    visual: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    engagement: int = 0


class ArticlePage(BaseModel):
    """One page of a paginated stream."""
    stream_id: str
    items: List[Article] = Field(default_factory=list)
    continuation: Optional[str] = Field(None, description="Opaque cursor for the next page")

    @property
    def has_more(self) -> bool:
        return self.continuation is not None


class Subscription(BaseModel):
    id: str
    title: str = ""
    website: Optional[str] = None
    categories: List[str] = Field(default_factory=list)


class Profile(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email or self.id


class Bookmark(BaseModel):
    """Read-later item stored at the bookmarking provider."""
    id: int
    url: str
    title: str = ""
    description: str = ""
    time: Optional[datetime] = None
    starred: bool = False
    progress: float = 0.0
