import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class Post(BaseModel):
    id: str = ""
    title: str = ""
    content: str = ""
    tags: List[str] = Field(default_factory=list)
    createdTime: datetime.datetime = Field(default_factory=utcnow)
    modifiedTime: datetime.datetime = Field(default_factory=utcnow)

    @field_validator("createdTime", "modifiedTime")
    @classmethod
    def _assume_utc(cls, value: datetime.datetime) -> datetime.datetime:
        # naive timestamps are stored as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=datetime.timezone.utc)
        return value


class PostCreate(BaseModel):
    title: str = ""
    content: str = ""
    tags: List[str] = Field(default_factory=list)


class PostUpdate(PostCreate):
    pass


class PostDetail(Post):
    contentHtml: str = ""


class PostRef(BaseModel):
    id: str
    title: str


class NodeOut(BaseModel):
    label: str
    path: str
    posts: List[PostRef] = Field(default_factory=list)
    children: List["NodeOut"] = Field(default_factory=list)


class RenderMarkdownRequest(BaseModel):
    markdown: Optional[str] = ""


class StoredPost(Post):
    """A post as read back from disk: every field must be present."""

    id: str
    title: str
    content: str
    tags: List[str]
    createdTime: datetime.datetime
    modifiedTime: datetime.datetime
