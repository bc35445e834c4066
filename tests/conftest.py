"""Root test configuration: content-tree fixtures and environment isolation"""

import logging
import os
from pathlib import Path

import pytest
import yaml

from sitesearch.core.log import GroupLogger


def _write_entry(root: Path, source: str, name: str, frontmatter: dict, body: str = "") -> Path:
    """Write one markdown entry with YAML frontmatter under root/source/."""
    path = root / source / name
    path.parent.mkdir(parents=True, exist_ok=True)
    header = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
    path.write_text(f"---\n{header}---\n\n{body}", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Drop SITESEARCH_* variables so settings come from defaults unless a test sets them."""
    for name in list(os.environ):
        if name.startswith("SITESEARCH_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach handlers that CLI commands add, so later tests never write to a closed runner stream."""
    yield
    logger = logging.getLogger("sitesearch")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture(name="logger")
def logger_fixture():
    return GroupLogger(logging.getLogger("sitesearch.tests"))


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path):
    """Two docs (one draft), one tool article for 'anki', one page."""
    root = tmp_path / "content"
    _write_entry(root, "docs", "first-post.md", {
        "title": "First Post",
        "description": "Getting started with immersion",
        "publishedDate": "2024-01-01T00:00:00Z",
        "tags": ["immersion", "beginner"],
        "categories": ["getting-started"],
        "status": "published",
    }, "# First\n\nSome <b>bold</b> words &amp; more.\n\n```python\nprint(1)\n```\n")
    _write_entry(root, "docs", "wip.md", {
        "title": "Work In Progress",
        "description": "Not ready yet",
        "publishedDate": "2024-06-01T00:00:00Z",
        "status": "draft",
    }, "Draft body")
    _write_entry(root, "tool-articles", "anki-setup.md", {
        "title": "Anki Setup",
        "description": "Configure Anki decks",
        "publishedDate": "2024-03-10T00:00:00Z",
        "toolName": "anki",
        "tags": ["anki", "srs"],
        "categories": ["flashcards"],
        "status": "published",
    }, "![deck](deck.png)\n\nInstall the add-on.")
    _write_entry(root, "pages", "about.md", {
        "title": "About",
        "description": "About this site",
        "status": "published",
    }, "We write about language learning.")
    return root


@pytest.fixture(name="write_entry")
def write_entry_fixture():
    """The entry writer helper, for tests that build their own content tree."""
    return _write_entry
