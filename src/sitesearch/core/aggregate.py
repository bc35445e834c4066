"""Index aggregation: load all sources, keep published entries, normalize, filter"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Iterable, Optional, Protocol

from sitesearch.core.errors import SourceFetchError
from sitesearch.core.log import GroupLogger
from sitesearch.core.models import (
    SOURCE_ORDER, AggregateIndex, ContentEntry, ContentRecord, IndexFilters, IndexMetadata,
    RecordType, SourceType,
)
from sitesearch.core.normalize import normalize_entry
from sitesearch.core.routes import PathResolver
from sitesearch.core.source import visible_entries


class EntrySource(Protocol):
    def get_entries(self, source: SourceType) -> list[ContentEntry]: ...


def fetch_sources(store: EntrySource, workers: int = 3) -> dict[SourceType, list[ContentEntry]]:
    """Load every source concurrently. Any single failure fails the whole fetch."""
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {source: executor.submit(store.get_entries, source) for source in SOURCE_ORDER}
        results = {}
        for source, future in futures.items():
            try:
                results[source] = future.result()
            except SourceFetchError:
                raise
            except Exception as e:
                raise SourceFetchError(source.value, e) from e
    return results


def _unique(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def build_metadata(
    records: list[ContentRecord],
    counts: dict[SourceType, int],
    generated_at: datetime,
    ) -> IndexMetadata:
    """Corpus-wide counts and vocabularies; always computed from the unfiltered record set."""
    return IndexMetadata(
        total_items=len(records),
        docs_count=counts.get(SourceType.docs, 0),
        tool_articles_count=counts.get(SourceType.tool_articles, 0),
        pages_count=counts.get(SourceType.pages, 0),
        last_updated=generated_at.isoformat(),
        available_categories=_unique(c for r in records for c in r.categories),
        available_tags=_unique(t for r in records for t in r.tags),
        available_tools=_unique(
            r.tool_name for r in records if r.type == RecordType.tool_article and r.tool_name
        ),
    )


def matches(record: ContentRecord, filters: IndexFilters) -> bool:
    if filters.category and filters.category not in record.categories:
        return False
    if filters.tag and filters.tag not in record.tags:
        return False
    if filters.tool and not (record.type == RecordType.tool_article and record.tool_name == filters.tool):
        return False
    if filters.type and record.type != filters.type:
        return False
    return True


def apply_filters(records: list[ContentRecord], filters: IndexFilters) -> list[ContentRecord]:
    """AND-combine every set filter, preserving relative order."""
    if filters.is_empty():
        return list(records)
    return [r for r in records if matches(r, filters)]


def build_index(
    store: EntrySource,
    resolver: PathResolver,
    logger: GroupLogger,
    filters: Optional[IndexFilters] = None,
    workers: int = 3,
    now: Optional[datetime] = None,
    ) -> AggregateIndex:
    """Merge the published entries of all sources into one AggregateIndex.

    Records are concatenated docs, tool-articles, pages with no cross-source sort.
    Raises SourceFetchError if any source fails to load; no partial index is built.
    """
    filters = filters or IndexFilters()
    now = now or datetime.now(timezone.utc)

    logger.log("Generating comprehensive search data from all content collections...")
    fetched = fetch_sources(store, workers)

    visible = {source: visible_entries(fetched[source]) for source in SOURCE_ORDER}
    counts = {source: len(entries) for source, entries in visible.items()}
    logger.log(
        f"Found {counts[SourceType.docs]} docs, {counts[SourceType.tool_articles]} tool articles, "
        f"{counts[SourceType.pages]} pages",
        "success",
    )

    records = [
        normalize_entry(entry, resolver, logger, now=now)
        for source in SOURCE_ORDER
        for entry in visible[source]
    ]
    metadata = build_metadata(records, counts, now)
    filtered = apply_filters(records, filters)

    logger.log(f"Generated search data for {len(filtered)} items ({len(records)} total)", "success")
    logger.log_summary("Search data summary", {
        "Total items": len(records),
        "Filtered items": len(filtered),
        "Docs": counts[SourceType.docs],
        "Tool articles": counts[SourceType.tool_articles],
        "Pages": counts[SourceType.pages],
        "Available categories": len(metadata.available_categories),
        "Available tags": len(metadata.available_tags),
        "Available tools": len(metadata.available_tools),
    })
    return AggregateIndex(metadata=metadata, records=filtered, applied_filters=filters)
