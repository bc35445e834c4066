"""Integration tests for the build, status and browse commands"""

import json

from typer.testing import CliRunner

from sitesearch.cli.cli import app


runner = CliRunner()


def test_build_cmd_writes_index(content_dir, tmp_path, monkeypatch):
    """build produces both JSON artifacts and prints a summary line."""
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, [
        "build",
        "--content-dir", str(content_dir),
        "--out-dir", str(tmp_path / "dist"),
    ])
    assert result.exit_code == 0, result.output
    assert "Indexed 3 item(s)" in result.output
    assert (tmp_path / "dist" / "search.json").exists()
    assert (tmp_path / "dist" / "search" / "comprehensive.json").exists()


def test_build_cmd_reads_env(content_dir, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SITESEARCH_CONTENT_DIR", str(content_dir))
    result = runner.invoke(app, ["build", "--tool", "anki"])
    assert result.exit_code == 0, result.output
    body = json.loads((tmp_path / "dist" / "search" / "comprehensive.json").read_text())
    assert [r["id"] for r in body["data"]] == ["tool-anki-setup"]


def test_build_cmd_invalid_type(content_dir, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["build", "--content-dir", str(content_dir), "--type", "video"])
    assert result.exit_code == 1
    assert "Invalid filter" in result.output


def test_build_cmd_failure(tmp_path, monkeypatch, write_entry):
    """A broken source exits 1 and writes nothing."""
    monkeypatch.chdir(tmp_path)
    write_entry(tmp_path / "content", "docs", "broken.md", {"title": "No description or date"})
    result = runner.invoke(app, ["build", "--content-dir", str(tmp_path / "content")])
    assert result.exit_code == 1
    assert "Index build failed (source_fetch_failed)" in result.output
    assert not (tmp_path / "dist").exists()


def test_status_cmd(content_dir, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["status", "--content-dir", str(content_dir)])
    assert result.exit_code == 0, result.output
    assert "docs: 1 published, 1 draft, 0 archived" in result.output
    assert "pages: 1 published, 0 draft, 0 archived" in result.output


def test_browse_cmd(content_dir, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner.invoke(app, ["build", "--content-dir", str(content_dir)])
    result = runner.invoke(app, ["browse", "--per-page", "2", "--page", "2"])
    assert result.exit_code == 0, result.output
    assert "First Post" in result.output
    assert "Page 2/2 (3 records)" in result.output


def test_browse_cmd_out_of_range(content_dir, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner.invoke(app, ["build", "--content-dir", str(content_dir)])
    result = runner.invoke(app, ["browse", "--page", "9"])
    assert result.exit_code == 0, result.output
    assert "Page 1/1" in result.output


def test_browse_cmd_missing_artifact(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["browse", str(tmp_path / "missing.json")])
    assert result.exit_code == 1
    assert "Could not load" in result.output
