"""Unit tests for core/routes.py"""

import pytest

from sitesearch.config import DEFAULT_ROUTES
from sitesearch.core.errors import PathResolutionError
from sitesearch.core.models import SourceType
from sitesearch.core.routes import PathResolver


def test_resolve_default_routes():
    resolver = PathResolver(DEFAULT_ROUTES)
    assert resolver.resolve(SourceType.docs, "intro") == "/docs/intro"
    assert resolver.resolve(SourceType.pages, "about") == "/about"
    assert resolver.resolve(SourceType.tool_articles, "setup", tool="anki") == "/tools/anki/setup"


def test_resolve_accepts_plain_source_names():
    assert PathResolver({"docs": "/a/{slug}"}).resolve("docs", "x") == "/a/x"


def test_resolve_unmapped_source_raises():
    with pytest.raises(PathResolutionError, match="no route mapping"):
        PathResolver({}).resolve(SourceType.docs, "intro")


def test_resolve_tool_route_without_tool_raises():
    with pytest.raises(PathResolutionError, match="tool name"):
        PathResolver(DEFAULT_ROUTES).resolve(SourceType.tool_articles, "setup")


def test_resolve_bad_template_raises():
    """Unknown placeholders surface as PathResolutionError, not KeyError."""
    with pytest.raises(PathResolutionError, match="bad route template"):
        PathResolver({"docs": "/docs/{year}/{slug}"}).resolve(SourceType.docs, "intro")
