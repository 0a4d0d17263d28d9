from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime string ("Z" suffix allowed)."""
    s = (value or "").strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    # naive and aware values must stay comparable for sorting
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


class SeoMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    meta_description: str = Field(default="", alias="metaDescription")
    keywords: List[str] = Field(default_factory=list)


class ArticleMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    title: str = Field(min_length=1)
    summary: str = Field(min_length=1)
    author: str = Field(min_length=1)
    publish_date: str = Field(alias="publishDate")
    last_modified: Optional[str] = Field(default=None, alias="lastModified")
    tags: List[str] = Field(default_factory=list)
    category: str = ""
    cover_image: str = Field(default="", alias="coverImage")
    reading_time: int = Field(default=1, gt=0, alias="readingTime")
    featured: bool = False
    published: bool = False
    seo: Optional[SeoMetadata] = None

    @field_validator("title", "summary", "author")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("publish_date", "last_modified")
    @classmethod
    def _iso_date(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            parse_iso(v)
        return v

    @property
    def published_at(self) -> datetime:
        return parse_iso(self.publish_date)

    @property
    def effective_last_modified(self) -> str:
        return self.last_modified or self.publish_date

    def has_tag(self, tag: str) -> bool:
        wanted = (tag or "").lower()
        return any(t.lower() == wanted for t in self.tags)

    def in_category(self, category: str) -> bool:
        return self.category.lower() == (category or "").lower()

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ArticleSummary(BaseModel):
    """Entry of the aggregate index: no content, no assets."""
    slug: str
    metadata: ArticleMetadata

    def to_dict(self) -> Dict[str, Any]:
        return {"slug": self.slug, "metadata": self.metadata.to_dict()}


class Article(BaseModel):
    slug: str
    metadata: ArticleMetadata
    content: str = ""
    assets: List[str] = Field(default_factory=list)

    def summary(self) -> ArticleSummary:
        return ArticleSummary(slug=self.slug, metadata=self.metadata)

    def matches(self, query: str) -> bool:
        q = (query or "").strip().lower()
        if not q:
            return True
        m = self.metadata
        return (
            q in m.title.lower()
            or q in m.summary.lower()
            or q in m.category.lower()
            or any(q in t.lower() for t in m.tags)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "metadata": self.metadata.to_dict(),
            "content": self.content,
            "assets": list(self.assets),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Article":
        return cls(
            slug=data["slug"],
            metadata=ArticleMetadata.model_validate(data["metadata"]),
            content=data.get("content") or "",
            assets=list(data.get("assets") or []),
        )
