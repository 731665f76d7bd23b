"""Blog post data models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from genieblog.services.slugs import slugify
from genieblog.services.text import WORDS_PER_MINUTE, calculate_read_time

T = TypeVar("T")

DEFAULT_AUTHOR = "SuiteGenie Team"

# camelCase keys used by the authored post files → model field names
_SOURCE_FIELD_NAMES = {
    "content": "body",
    "publishDate": "publish_date",
    "lastModified": "last_modified",
    "readTime": "read_time",
    "canonicalUrl": "canonical_url",
}


class PostStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class BlogPost(BaseModel):
    """A single blog post as authored: metadata plus the raw Markdown body."""

    id: str = Field(..., min_length=1)
    title: str
    slug: str = ""
    category: str
    excerpt: str = ""
    body: str = ""
    tags: list[str] = []
    publish_date: datetime
    last_modified: datetime | None = None
    status: PostStatus = PostStatus.DRAFT
    read_time: int | None = None
    author: str = DEFAULT_AUTHOR
    featured: bool = False
    canonical_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _migrate_source_fields(cls, data: Any) -> Any:
        """Accept the camelCase layout of the authored JSON files."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for source, target in _SOURCE_FIELD_NAMES.items():
            if source in data and target not in data:
                data[target] = data.pop(source)
        # author: {"name": ...} → "..."
        author = data.get("author")
        if isinstance(author, dict):
            data["author"] = author.get("name") or DEFAULT_AUTHOR
        # seo.canonicalUrl → canonical_url
        seo = data.get("seo")
        if isinstance(seo, dict) and "canonical_url" not in data:
            data["canonical_url"] = seo.get("canonicalUrl")
        if data.get("tags") is None:
            data["tags"] = []
        return data

    @model_validator(mode="after")
    def _fill_defaults(self) -> "BlogPost":
        """Derive slug and last_modified, and make dates timezone-aware."""
        if not self.slug:
            self.slug = slugify(self.title)
        if self.publish_date.tzinfo is None:
            self.publish_date = self.publish_date.replace(tzinfo=timezone.utc)
        if self.last_modified is None:
            self.last_modified = self.publish_date
        elif self.last_modified.tzinfo is None:
            self.last_modified = self.last_modified.replace(tzinfo=timezone.utc)
        if self.read_time is not None and self.read_time < 1:
            self.read_time = None
        return self

    @property
    def is_published(self) -> bool:
        return self.status is PostStatus.PUBLISHED

    @property
    def route_key(self) -> str:
        """``category/slug``, the key used by URLs and the search index."""
        return f"{self.category}/{self.slug}"

    def reading_minutes(self, words_per_minute: int = WORDS_PER_MINUTE) -> int:
        if self.read_time:
            return self.read_time
        return calculate_read_time(self.body, words_per_minute)


class CategoryMeta(BaseModel):
    """Display metadata for a blog category."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    description: str
    badge_class: str = ""
    pill_class: str = ""


class CategoryList(BaseModel):
    categories: list[CategoryMeta]


class TocEntry(BaseModel):
    """One heading in a post's table of contents."""

    id: str
    title: str
    level: int


class Page(BaseModel, Generic[T]):
    """One page of an ordered listing."""

    page: int
    total: int
    total_pages: int
    items: list[T]


class PostSummary(BaseModel):
    """Post metadata for listing display (no body)."""

    id: str
    title: str
    slug: str
    category: str
    excerpt: str
    tags: list[str]
    publish_date: datetime
    last_modified: datetime
    author: str
    featured: bool
    read_time_minutes: int
    url: str

    @classmethod
    def from_post(
        cls, post: BlogPost, words_per_minute: int = WORDS_PER_MINUTE
    ) -> "PostSummary":
        return cls(
            id=post.id,
            title=post.title,
            slug=post.slug,
            category=post.category,
            excerpt=post.excerpt,
            tags=post.tags,
            publish_date=post.publish_date,
            last_modified=post.last_modified or post.publish_date,
            author=post.author,
            featured=post.featured,
            read_time_minutes=post.reading_minutes(words_per_minute),
            url=f"/blogs/{post.route_key}",
        )


class PostDetail(PostSummary):
    """A single post with its rendered body and navigation."""

    category_label: str
    canonical_url: str
    html: str
    toc: list[TocEntry]
    related: list[PostSummary] = []


class RenderRequest(BaseModel):
    """Raw Markdown submitted for preview rendering."""

    body: str = Field(..., max_length=200_000)
    unique_ids: bool | None = None


class RenderResponse(BaseModel):
    html: str
    toc: list[TocEntry]
    word_count: int
    read_time_minutes: int
