"""Build pipeline: emit the index and write the static search artifacts"""

import json
from pathlib import Path
from typing import Optional

from sitesearch.config import Settings
from sitesearch.core.emit import IndexResponse, emit_index, to_json
from sitesearch.core.errors import IndexBuildError
from sitesearch.core.log import GroupLogger
from sitesearch.core.models import IndexFilters
from sitesearch.core.routes import PathResolver
from sitesearch.core.source import ContentStore


def build_response(
    settings: Settings,
    filters: Optional[IndexFilters] = None,
    logger: Optional[GroupLogger] = None,
    ) -> IndexResponse:
    """Emit a fresh index response from the configured content root."""
    return emit_index(
        ContentStore(settings.content_dir),
        PathResolver(settings.routes),
        logger or GroupLogger(),
        filters=filters,
        cache_max_age=settings.cache_max_age,
        workers=settings.fetch_workers,
    )


def _write_all(files: dict[Path, str]) -> None:
    """Stage every file beside its target, then move them into place together.

    A failed write removes the staged files and leaves existing artifacts untouched.
    """
    staged: dict[Path, Path] = {}
    try:
        for path, text in files.items():
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp = path.with_name(path.name + ".tmp")
            staged[path] = tmp
            tmp.write_text(text, encoding="utf-8")
    except OSError:
        for tmp in staged.values():
            tmp.unlink(missing_ok=True)
        raise
    for path, tmp in staged.items():
        tmp.replace(path)


def run_build(
    settings: Settings,
    filters: Optional[IndexFilters] = None,
    logger: Optional[GroupLogger] = None,
    ) -> tuple[IndexResponse, list[Path]]:
    """Write the comprehensive envelope and the bare record array under output_dir.

    Nothing is written when the build fails; IndexBuildError carries the error payload.
    """
    response = build_response(settings, filters, logger)
    if not response.ok:
        raise IndexBuildError(response.json())

    out = Path(settings.output_dir)
    envelope_path = out / settings.comprehensive_file
    index_path = out / settings.index_file
    _write_all({
        envelope_path: response.body,
        index_path: to_json(json.loads(response.body)["data"]),
    })
    return response, [envelope_path, index_path]
