"""Integration tests for the local index endpoint"""

import threading

import pytest
import requests

from sitesearch.config import Settings
from sitesearch.server import make_server


@pytest.fixture(name="base_url")
def base_url_fixture(content_dir, tmp_path):
    settings = Settings(content_dir=str(content_dir), output_dir=str(tmp_path / "dist"))
    server = make_server(settings, port=0)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


def test_envelope_route(base_url):
    resp = requests.get(f"{base_url}/search/comprehensive.json", timeout=5)
    assert resp.status_code == 200
    assert resp.headers["Content-Type"] == "application/json"
    assert resp.headers["Cache-Control"] == "public, max-age=1800"
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    body = resp.json()
    assert body["metadata"]["totalItems"] == 3
    assert body["filters"] == {}


def test_envelope_route_with_filters(base_url):
    resp = requests.get(f"{base_url}/search/comprehensive.json", params={"tool": "anki"}, timeout=5)
    body = resp.json()
    assert [r["id"] for r in body["data"]] == ["tool-anki-setup"]
    assert body["filters"] == {"tool": "anki"}


def test_index_route_returns_array(base_url):
    resp = requests.get(f"{base_url}/search.json", params={"type": "docs"}, timeout=5)
    assert resp.status_code == 200
    assert [r["id"] for r in resp.json()] == ["docs-first-post"]


def test_invalid_filter(base_url):
    resp = requests.get(f"{base_url}/search.json", params={"type": "video"}, timeout=5)
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "invalid_filter"
    assert set(body) == {"error", "message", "timestamp"}


def test_unknown_route(base_url):
    resp = requests.get(f"{base_url}/nope", timeout=5)
    assert resp.status_code == 404
    body = resp.json()
    assert body["error"] == "not_found"
    assert "timestamp" in body


def test_build_failure_is_500(base_url, content_dir):
    """Sources are re-read per request, so a broken file surfaces on the next GET."""
    (content_dir / "pages" / "bad.md").write_text("---\n- not a mapping\n---\n")
    resp = requests.get(f"{base_url}/search/comprehensive.json", timeout=5)
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "source_fetch_failed"
    assert "timestamp" in body
