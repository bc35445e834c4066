"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError

from sitesearch.client.engine import EngineState, PaginationEngine
from sitesearch.config import Settings, load_config
from sitesearch.core.errors import IndexBuildError, SourceFetchError
from sitesearch.core.log import GroupLogger, setup_logging
from sitesearch.core.models import SOURCE_ORDER, IndexFilters
from sitesearch.core.pipeline import run_build
from sitesearch.core.source import ContentStore, count_by_status


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    setup_logging(settings.log_level)
    return settings


def build_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Root of the content collections")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    category: Annotated[Optional[str], typer.Option("--category", help="Keep records in this category")] = None,
    tag: Annotated[Optional[str], typer.Option("--tag", help="Keep records with this tag")] = None,
    tool: Annotated[Optional[str], typer.Option("--tool", help="Keep tool articles for this tool")] = None,
    type_: Annotated[Optional[str], typer.Option("--type", help="docs, tool-article or page")] = None,
    ):
    """Aggregate all published content and write the search index artifacts."""
    settings = _settings(overrides={"content_dir": content, "output_dir": out})
    try:
        filters = IndexFilters(category=category, tag=tag, tool=tool, type=type_)
    except ValidationError as e:
        _fail("Invalid filter", e)

    try:
        response, paths = run_build(settings, filters)
    except IndexBuildError as e:
        _fail(f"Index build failed ({e.payload.get('error')})", e)

    meta = response.json()["metadata"]
    for p in paths:
        typer.echo(f"  wrote {p}")
    typer.echo(
        f"Indexed {meta['totalItems']} item(s) - "
        f"{meta['docsCount']} docs, "
        f"{meta['toolArticlesCount']} tool articles, "
        f"{meta['pagesCount']} pages"
    )


def browse_cmd(
    source: Annotated[Optional[str], typer.Argument(help="search.json path or URL")] = None,
    page: Annotated[int, typer.Option("--page", help="Page to display")] = 1,
    per_page: Annotated[Optional[int], typer.Option("--per-page", help="Records per page")] = None,
    ):
    """Load the search artifact with the client engine and print one page."""
    settings = _settings(overrides={"posts_per_page": per_page})
    source = source or str(Path(settings.output_dir) / settings.index_file)
    engine = PaginationEngine(
        source,
        logger=GroupLogger(),
        posts_per_page=settings.posts_per_page,
        max_visible_pages=settings.max_visible_pages,
        locale=settings.locale,
        link_base=settings.link_base,
        fetch_timeout=settings.fetch_timeout,
    )
    if engine.load() == EngineState.failed:
        _fail(f"Could not load {source}", engine.error)

    engine.update_display()
    engine.change_page(page)
    if engine.current_page != page:
        typer.echo(f"Page {page} is out of range; showing page {engine.current_page}.", err=True)

    for post in engine.current_window():
        typer.echo(f"{str(post.get('publishedDate') or ''):<26} {post.get('title') or 'Untitled'}")
    typer.echo(f"Page {engine.current_page}/{engine.total_pages()} ({len(engine.sorted_posts)} records)")


def status_cmd(
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Root of the content collections")] = None,
    ):
    """Count entries per source by publication status."""
    settings = _settings(overrides={"content_dir": content})
    store = ContentStore(settings.content_dir)
    for source in SOURCE_ORDER:
        try:
            counts = count_by_status(store.get_entries(source))
        except SourceFetchError as e:
            _fail(f"Could not read {source.value}", e)
        summary = ", ".join(f"{n} {status}" for status, n in counts.items())
        typer.echo(f"{source.value}: {summary}")


def serve_cmd(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Port")] = 4321,
    content: Annotated[Optional[str], typer.Option("--content-dir", help="Root of the content collections")] = None,
    ):
    """Serve the search index, rebuilt per request, with query-parameter filters."""
    from sitesearch.server import make_server

    settings = _settings(overrides={"content_dir": content})
    server = make_server(settings, host, port)
    typer.echo(f"Serving /{settings.comprehensive_file} on http://{host}:{port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        typer.echo("Stopped.")
    finally:
        server.server_close()
