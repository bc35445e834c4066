"""Unit tests for core/emit.py"""

import logging

import pytest

from sitesearch.config import DEFAULT_ROUTES
from sitesearch.core.emit import GROUP_TITLE, emit_index, error_response
from sitesearch.core.errors import SourceFetchError
from sitesearch.core.models import IndexFilters, SourceType
from sitesearch.core.routes import PathResolver
from sitesearch.core.source import ContentStore


class BrokenStore:
    def get_entries(self, source):
        if source == SourceType.tool_articles:
            raise SourceFetchError(source.value, "unreadable")
        return []


@pytest.fixture(name="resolver")
def resolver_fixture():
    return PathResolver(DEFAULT_ROUTES)


def test_emit_success_shape(content_dir, resolver, logger):
    """A successful emit carries metadata, data, and filters in the wire shape."""
    response = emit_index(ContentStore(content_dir), resolver, logger)
    assert response.status == 200
    body = response.json()
    assert set(body) == {"metadata", "data", "filters"}
    assert body["filters"] == {}
    assert body["metadata"]["type"] == "comprehensive"
    first = body["data"][0]
    assert first["id"] == "docs-first-post"
    assert first["publishedDate"] == "2024-01-01T00:00:00Z"
    assert "toolName" not in first
    assert "rawBody" not in first
    assert body["data"][1]["toolName"] == "anki"


def test_emit_success_headers(content_dir, resolver, logger):
    response = emit_index(ContentStore(content_dir), resolver, logger, cache_max_age=900)
    assert response.headers["Content-Type"] == "application/json"
    assert response.headers["Cache-Control"] == "public, max-age=900"
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.headers["Access-Control-Allow-Methods"] == "GET"


def test_emit_echoes_filters(content_dir, resolver, logger):
    response = emit_index(ContentStore(content_dir), resolver, logger, filters=IndexFilters(tool="anki"))
    body = response.json()
    assert body["filters"] == {"tool": "anki"}
    assert [r["id"] for r in body["data"]] == ["tool-anki-setup"]


def test_emit_failure_is_error_payload(resolver, logger):
    """A failing source becomes a 500 error payload instead of an exception."""
    response = emit_index(BrokenStore(), resolver, logger)
    assert response.status == 500
    assert response.headers == {"Content-Type": "application/json"}
    body = response.json()
    assert set(body) == {"error", "message", "timestamp"}
    assert body["error"] == "source_fetch_failed"
    assert "tool-articles" in body["message"]


def test_emit_closes_log_group(resolver, logger, caplog):
    caplog.set_level(logging.INFO, logger="sitesearch.tests")
    emit_index(BrokenStore(), resolver, logger)
    assert logger.current_group is None
    messages = [r.getMessage() for r in caplog.records]
    assert any(GROUP_TITLE in m and "done" in m for m in messages)
    assert any(r.levelname == "ERROR" for r in caplog.records)


def test_error_response_unexpected_exception():
    body = error_response(RuntimeError("boom")).json()
    assert body["error"] == "internal_error"
    assert body["message"] == "boom"
