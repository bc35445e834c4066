"""Convert raw content entries of each source variant into ContentRecords"""

import re
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from sitesearch.core.errors import PathResolutionError
from sitesearch.core.log import GroupLogger
from sitesearch.core.models import (
    ContentEntry, ContentRecord, DocsEntry, PageEntry, RecordType, SourceType, ToolArticleEntry,
)
from sitesearch.core.routes import PathResolver
from sitesearch.core.utils.text import count_words, has_code_blocks, has_images, sanitize_content


TOOL_TAG_RE = re.compile(r'^[a-z]+$')

DEFAULT_DOCS_CATEGORY = "general"
DEFAULT_TOOL_NAME = "general"


def searchable_text(*parts: str | Iterable[str]) -> str:
    """Join non-empty strings (and strings inside sequences) with single spaces."""
    flat: list[str] = []
    for part in parts:
        if isinstance(part, str):
            flat.append(part)
        else:
            flat.extend(part)
    return " ".join(p for p in flat if p)


def infer_tool_name(entry: ToolArticleEntry) -> str:
    """Declared tool name, else the first all-lowercase alphabetic tag, else 'general'.

    The tag fallback is a heuristic: any single lowercase word tag qualifies.
    """
    if entry.data.tool_name:
        return entry.data.tool_name
    return next((t for t in entry.data.tags if TOOL_TAG_RE.match(t)), DEFAULT_TOOL_NAME)


def _resolve_url(
    resolver: PathResolver,
    logger: GroupLogger,
    source: SourceType,
    slug: str,
    fallback: str,
    tool: str | None = None,
    ) -> str:
    try:
        return resolver.resolve(source, slug, tool=tool)
    except PathResolutionError as e:
        logger.log(f"Failed to resolve {source.value} path for {slug}: {e}", "warning")
        return fallback


def _derived(raw: str) -> dict:
    cleaned = sanitize_content(raw)
    return {
        "raw_body": raw,
        "cleaned_content": cleaned,
        "word_count": count_words(cleaned),
        "content_length": len(cleaned),
        "has_code_blocks": has_code_blocks(raw),
        "has_images": has_images(raw),
    }


def to_docs_record(entry: DocsEntry, resolver: PathResolver, logger: GroupLogger, **_) -> ContentRecord:
    d = entry.data
    derived = _derived(entry.body)
    categories = list(d.categories) or [DEFAULT_DOCS_CATEGORY]
    return ContentRecord(
        id=f"docs-{entry.slug}",
        slug=entry.slug,
        title=d.title,
        description=d.description,
        published_date=d.published_date,
        tags=list(d.tags),
        categories=categories,
        type=RecordType.docs,
        searchable_text=searchable_text(d.title, d.description, derived["cleaned_content"], d.tags, categories),
        url=_resolve_url(resolver, logger, SourceType.docs, entry.slug, f"/docs/{entry.slug}"),
        path=f"docs/{entry.slug}",
        emoji=d.emoji,
        **derived,
    )


def to_tool_article_record(
    entry: ToolArticleEntry, resolver: PathResolver, logger: GroupLogger, **_,
    ) -> ContentRecord:
    d = entry.data
    derived = _derived(entry.body)
    tool = infer_tool_name(entry)
    # duplicates are tolerated; consumers treat categories as a set
    categories = ["tools", tool, *d.categories]
    return ContentRecord(
        id=f"tool-{entry.slug}",
        slug=entry.slug,
        title=d.title,
        description=d.description,
        published_date=d.published_date,
        tags=list(d.tags),
        categories=categories,
        type=RecordType.tool_article,
        tool_name=tool,
        searchable_text=searchable_text(d.title, d.description, derived["cleaned_content"], d.tags, categories),
        url=_resolve_url(
            resolver, logger, SourceType.tool_articles, entry.slug,
            f"/tools/{tool}/{entry.slug}", tool=tool,
        ),
        path=f"tools/{tool}/{entry.slug}",
        emoji=d.emoji,
        **derived,
    )


def to_page_record(
    entry: PageEntry, resolver: PathResolver, logger: GroupLogger, now: Optional[datetime] = None,
    ) -> ContentRecord:
    d = entry.data
    derived = _derived(entry.body)
    title = d.title or entry.slug
    description = d.description or ""
    categories = ["pages"]
    published = d.published_date or (now or datetime.now(timezone.utc)).isoformat()
    return ContentRecord(
        id=f"page-{entry.slug}",
        slug=entry.slug,
        title=title,
        description=description,
        published_date=published,
        tags=[],
        categories=categories,
        type=RecordType.page,
        searchable_text=searchable_text(title, description, derived["cleaned_content"], categories),
        url=_resolve_url(resolver, logger, SourceType.pages, entry.slug, f"/{entry.slug}"),
        path=entry.slug,
        **derived,
    )


NORMALIZERS: dict[type, Callable[..., ContentRecord]] = {
    DocsEntry:        to_docs_record,
    ToolArticleEntry: to_tool_article_record,
    PageEntry:        to_page_record,
}


def normalize_entry(
    entry: ContentEntry,
    resolver: PathResolver,
    logger: GroupLogger,
    now: Optional[datetime] = None,
    ) -> ContentRecord:
    """Normalize one entry with the converter registered for its variant."""
    convert = NORMALIZERS.get(type(entry))
    if convert is None:
        raise TypeError(f"No normalizer for {type(entry).__name__}")
    return convert(entry, resolver, logger, now=now)
