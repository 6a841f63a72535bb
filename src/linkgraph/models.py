"""Pydantic models for posts, the graph dataset and link check reports."""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class PostMetadata(BaseModel):
    """Frontmatter metadata for a blog post."""

    title: str
    description: str | None = None
    date: dt.date | None = None  # Publication date; datetimes are truncated
    tags: list[str] = Field(default_factory=list)
    authors: list[str] = Field(default_factory=list)
    draft: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_datetime(cls, value):
        if isinstance(value, dt.datetime):
            return value.date()
        return value

    @field_validator("tags", "authors", mode="before")
    @classmethod
    def _empty_list_for_none(cls, value):
        # "tags:" with no value parses to None in YAML
        if value is None:
            return []
        return value


class Post(BaseModel):
    """A post or subpost in the content collection."""

    id: str  # Relative path without extension, e.g. "series/part-one"
    body: str = ""  # Raw markdown, frontmatter removed
    data: PostMetadata

    @property
    def title(self) -> str:
        return self.data.title

    @property
    def tags(self) -> list[str]:
        return self.data.tags


class PostSummary(BaseModel):
    """Lightweight post reference returned by the backlinks API."""

    id: str
    title: str
    description: str | None = None
    date: dt.date | None = None

    @classmethod
    def from_post(cls, post: Post) -> "PostSummary":
        return cls(
            id=post.id,
            title=post.data.title,
            description=post.data.description,
            date=post.data.date,
        )


class GraphNode(BaseModel):
    """A node in the force-directed graph dataset."""

    id: str
    name: str
    val: int  # Node size weight
    group: Literal["post", "tag"]
    color: str | None = None


class GraphLink(BaseModel):
    """A link between two graph nodes."""

    source: str
    target: str
    value: int  # Link strength


class GraphData(BaseModel):
    """Serializable node/link dataset for the client-side graph view."""

    nodes: list[GraphNode] = Field(default_factory=list)
    links: list[GraphLink] = Field(default_factory=list)


class BrokenLink(BaseModel):
    """An internal link whose target is not a known post or asset."""

    source_id: str  # Post containing the link
    link: str  # Full markdown link text as written, e.g. "[see](./x)"
    target_id: str  # Identifier the link resolved to


class LinkCheckReport(BaseModel):
    """Result of an offline link integrity check."""

    files_checked: int = 0
    links_checked: int = 0
    broken: list[BrokenLink] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.broken
