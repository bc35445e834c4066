"""Index emitter: serialize the aggregate (or a failure) as a JSON response"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from sitesearch.core.aggregate import EntrySource, build_index
from sitesearch.core.errors import SearchIndexError
from sitesearch.core.log import GroupLogger
from sitesearch.core.models import AggregateIndex, ErrorPayload, IndexFilters
from sitesearch.core.routes import PathResolver


GROUP_TITLE = "Comprehensive Search Data Generation"
ERROR_TITLE = "Failed to generate comprehensive search data"


@dataclass
class IndexResponse:
    status: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == 200

    def json(self):
        return json.loads(self.body)


def to_json(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def success_headers(cache_max_age: int = 1800) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Cache-Control": f"public, max-age={cache_max_age}",
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET",
        "Access-Control-Allow-Headers": "Content-Type",
    }


def index_response(index: AggregateIndex, cache_max_age: int = 1800) -> IndexResponse:
    return IndexResponse(status=200, body=to_json(index.to_wire()), headers=success_headers(cache_max_age))


def error_response(exc: Exception, now: Optional[datetime] = None) -> IndexResponse:
    payload = ErrorPayload(
        error=exc.kind if isinstance(exc, SearchIndexError) else "internal_error",
        message=str(exc),
        timestamp=(now or datetime.now(timezone.utc)).isoformat(),
    )
    return IndexResponse(
        status=500,
        body=to_json(payload.model_dump()),
        headers={"Content-Type": "application/json"},
    )


def emit_index(
    store: EntrySource,
    resolver: PathResolver,
    logger: GroupLogger,
    filters: Optional[IndexFilters] = None,
    cache_max_age: int = 1800,
    workers: int = 3,
    ) -> IndexResponse:
    """Build the index and wrap it in a response. Failures become a 500 error payload, never raise."""
    logger.start_group(GROUP_TITLE)
    try:
        index = build_index(store, resolver, logger, filters=filters, workers=workers)
        return index_response(index, cache_max_age)
    except Exception as e:
        logger.log(f"{ERROR_TITLE}: {e}", "error")
        return error_response(e)
    finally:
        logger.end_group()
