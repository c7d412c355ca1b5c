import datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from blogindex.errors import PostError


class Post(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    description: str
    pubDate: datetime.date
    updatedDate: Optional[datetime.date] = None
    heroImage: Optional[str] = None
    tags: Tuple[str, ...] = ()
    body: str = ""
    source_path: str = ""


class PostSummary(BaseModel):
    slug: str
    title: str
    description: str
    pubDate: datetime.date
    updatedDate: Optional[datetime.date] = None
    heroImage: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    readingTime: Optional[str] = None
    source_path: str = ""


class PostDetail(PostSummary):
    body: str


class SkippedFile(BaseModel):
    path: str
    error: str
    reason: str
    field: Optional[str] = None

    @classmethod
    def from_error(cls, error: PostError) -> "SkippedFile":
        return cls(
            path=error.path,
            error=type(error).__name__,
            reason=str(error),
            field=error.field,
        )


class BlogIndex(BaseModel):
    posts: List[PostSummary] = Field(default_factory=list)
    tags: Dict[str, List[str]] = Field(default_factory=dict)
    skipped: List[SkippedFile] = Field(default_factory=list)
