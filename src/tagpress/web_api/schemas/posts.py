"""
Post Schemas
============
Response models for post and tag endpoints.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from tagpress.model.post import Post, TagGroup


class PostSummary(BaseModel):
    """A post as shown in listings"""

    title: str
    slug: str
    date: datetime
    url: str = Field(..., description="Site-relative URL, always starting with '/'")
    subtitle: Optional[str] = None
    excerpt: str = ""
    tags: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Enriching telemetry with custom attributes",
                "slug": "telemetry-enrichment",
                "date": "2024-03-05T00:00:00",
                "url": "/2024/03/05/telemetry-enrichment/",
                "excerpt": "Attach request context to every span and log record.",
                "tags": ["observability", "telemetry"],
            }
        }
    )

    @classmethod
    def from_post(cls, post: Post) -> "PostSummary":
        return cls(
            title=post.title,
            slug=post.slug,
            date=post.date,
            url=post.url,
            subtitle=post.subtitle or None,
            excerpt=post.excerpt,
            tags=list(post.tags),
        )


class PostDetail(PostSummary):
    """A post with its rendered HTML body"""

    description: Optional[str] = None
    content: str = ""

    @classmethod
    def from_post(cls, post: Post) -> "PostDetail":
        return cls(
            **PostSummary.from_post(post).model_dump(),
            description=post.description or None,
            content=post.content,
        )


class TagSummary(BaseModel):
    """A tag with its post count"""

    name: str
    slug: str
    count: int = Field(..., ge=1)

    @classmethod
    def from_group(cls, group: TagGroup) -> "TagSummary":
        return cls(name=group.name, slug=group.slug, count=group.count)


class TagDetail(TagSummary):
    """A tag with its posts, newest first"""

    posts: List[PostSummary] = Field(default_factory=list)

    @classmethod
    def from_group(cls, group: TagGroup) -> "TagDetail":
        return cls(
            name=group.name,
            slug=group.slug,
            count=group.count,
            posts=[PostSummary.from_post(p) for p in group.posts],
        )
