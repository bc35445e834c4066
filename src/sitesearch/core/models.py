"""Data models: raw content entries, normalized records, and the aggregate index"""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SourceType(str, Enum):
    docs = "docs"
    tool_articles = "tool-articles"
    pages = "pages"


class RecordType(str, Enum):
    docs = "docs"
    tool_article = "tool-article"
    page = "page"


class PostStatus(str, Enum):
    published = "published"
    draft = "draft"
    archived = "archived"


# Fixed concatenation order of sources in the aggregate.
SOURCE_ORDER: tuple[SourceType, ...] = (SourceType.docs, SourceType.tool_articles, SourceType.pages)


def _iso(value):
    """YAML loads unquoted dates as date/datetime; records carry ISO strings."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class _Frontmatter(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: PostStatus = PostStatus.draft

    @field_validator("published_date", mode="before", check_fields=False)
    @classmethod
    def _coerce_date(cls, v):
        return _iso(v)

    @field_validator("tags", "categories", mode="before", check_fields=False)
    @classmethod
    def _coerce_terms(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return [str(t) for t in v if t is not None]


class DocsData(_Frontmatter):
    title:          str = Field(min_length=1)
    description:    str = Field(min_length=1)
    published_date: str = Field(alias="publishedDate")
    tags:           list[str] = []
    categories:     list[str] = []
    emoji:          Optional[str] = None


class ToolArticleData(DocsData):
    tool_name: Optional[str] = Field(default=None, alias="toolName")


class PageData(_Frontmatter):
    title:          Optional[str] = None
    description:    Optional[str] = None
    published_date: Optional[str] = Field(default=None, alias="publishedDate")


class _Entry(BaseModel):
    slug: str
    path: str                       # relative to the content root
    body: str = ""


class DocsEntry(_Entry):
    source: Literal["docs"] = "docs"
    data: DocsData


class ToolArticleEntry(_Entry):
    source: Literal["tool-articles"] = "tool-articles"
    data: ToolArticleData


class PageEntry(_Entry):
    source: Literal["pages"] = "pages"
    data: PageData


ContentEntry = Annotated[Union[DocsEntry, ToolArticleEntry, PageEntry], Field(discriminator="source")]


class ContentRecord(BaseModel):
    """One normalized, search-ready record. Derived fields are computed once by the normalizer."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id:               str
    slug:             str
    title:            str
    description:      str
    published_date:   str = Field(alias="publishedDate")
    tags:             list[str] = []
    categories:       list[str]
    type:             RecordType
    tool_name:        Optional[str] = Field(default=None, alias="toolName")
    raw_body:         str = Field(default="", alias="rawBody", exclude=True)
    cleaned_content:  str = Field(alias="content")
    searchable_text:  str = Field(alias="searchableText")
    word_count:       int = Field(alias="wordCount")
    content_length:   int = Field(alias="contentLength")
    has_code_blocks:  bool = Field(alias="hasCodeBlocks")
    has_images:       bool = Field(alias="hasImages")
    url:              str
    path:             str
    emoji:            Optional[str] = None


class IndexMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    total_items:          int = Field(alias="totalItems")
    docs_count:           int = Field(alias="docsCount")
    tool_articles_count:  int = Field(alias="toolArticlesCount")
    pages_count:          int = Field(alias="pagesCount")
    last_updated:         str = Field(alias="lastUpdated")
    available_categories: list[str] = Field(alias="availableCategories")
    available_tags:       list[str] = Field(alias="availableTags")
    available_tools:      list[str] = Field(alias="availableTools")
    type:                 Literal["comprehensive"] = "comprehensive"


class IndexFilters(BaseModel):
    """Optional AND-combined narrowing of the aggregate. Empty strings mean 'no constraint'."""
    model_config = ConfigDict(frozen=True)

    category: Optional[str] = None
    tag:      Optional[str] = None
    tool:     Optional[str] = None
    type:     Optional[RecordType] = None

    @field_validator("category", "tag", "tool", "type", mode="before")
    @classmethod
    def _blank_is_none(cls, v):
        return v or None

    @classmethod
    def from_query(cls, params: dict) -> "IndexFilters":
        """Build from query parameters; values may be lists as returned by parse_qs."""
        picked = {}
        for name in cls.model_fields:
            value = params.get(name)
            if isinstance(value, list):
                value = value[0] if value else None
            picked[name] = value
        return cls(**picked)

    def is_empty(self) -> bool:
        return not any((self.category, self.tag, self.tool, self.type))


class AggregateIndex(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    metadata:        IndexMetadata
    records:         list[ContentRecord] = Field(alias="data")
    applied_filters: IndexFilters = Field(default_factory=IndexFilters, alias="filters")

    def to_wire(self) -> dict:
        """JSON-ready dict in the published wire shape."""
        data = self.model_dump(mode="json", by_alias=True, exclude={"applied_filters"})
        data["filters"] = self.applied_filters.model_dump(mode="json", exclude_none=True)
        for record in data["data"]:
            if record.get("toolName") is None:
                record.pop("toolName", None)
            if record.get("emoji") is None:
                record.pop("emoji", None)
        return data


class ErrorPayload(BaseModel):
    error:     str
    message:   str
    timestamp: str
