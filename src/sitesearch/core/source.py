"""Content source adapter: markdown collections on disk and visibility filtering"""

import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Iterable, TypeVar

import yaml
from pydantic import TypeAdapter

from sitesearch.core.errors import SourceFetchError
from sitesearch.core.models import ContentEntry, PostStatus, SourceType
from sitesearch.core.utils.slug import slugify_path


FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*(?:\n|$)', re.DOTALL)
MD_EXTENSIONS = {'.md', '.mdx'}

_entry_adapter = TypeAdapter(ContentEntry)

E = TypeVar("E")


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path; empty when the directory is missing."""
    if not path.is_dir():
        return []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


class ContentStore:
    """Reads the three content collections from `root/<source>/`."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def collection_dir(self, source: SourceType) -> Path:
        return self.root / source.value

    def parse_file(self, source: SourceType, path: Path) -> ContentEntry:
        """Parse one markdown file into the entry variant for its source."""
        rel = PurePosixPath(path.relative_to(self.collection_dir(source)).as_posix())
        frontmatter, body = _strip_frontmatter(path.read_text(encoding='utf-8'))
        slug = frontmatter.get('slug') or slugify_path(rel)
        return _entry_adapter.validate_python({
            "source": source.value,
            "slug": str(slug),
            "path": f"{source.value}/{rel}",
            "body": body,
            "data": frontmatter,
        })

    def get_entries(self, source: SourceType) -> list[ContentEntry]:
        """All entries of a source regardless of status.

        Raises SourceFetchError naming the bad file, or both files when two
        entries share a slug (record ids derive from slugs).
        """
        entries = []
        seen: dict[str, Path] = {}
        for p in discover_files(self.collection_dir(source)):
            try:
                entry = self.parse_file(source, p)
            except (OSError, ValueError) as e:
                raise SourceFetchError(source.value, f"{p}: {e}") from e
            if entry.slug in seen:
                raise SourceFetchError(source.value, f"duplicate slug {entry.slug!r} in {seen[entry.slug]} and {p}")
            seen[entry.slug] = p
            entries.append(entry)
        return entries

    def get_published_entries(self, source: SourceType) -> list[ContentEntry]:
        return visible_entries(self.get_entries(source))


# --- status filtering ---

@dataclass(frozen=True)
class StatusInfo:
    is_visible: bool
    label: str


_STATUS_LABELS = {
    PostStatus.published: "Published",
    PostStatus.draft:     "Draft (hidden)",
    PostStatus.archived:  "Archived (hidden)",
}


def is_visible_status(status: PostStatus | str) -> bool:
    return status == PostStatus.published


def is_hidden_status(status: PostStatus | str) -> bool:
    return status in (PostStatus.draft, PostStatus.archived)


def status_info(status: PostStatus | str) -> StatusInfo:
    """Visibility and display label for a status; unknown values are hidden."""
    try:
        status = PostStatus(status)
    except ValueError:
        return StatusInfo(is_visible=False, label="Unknown status")
    return StatusInfo(is_visible=is_visible_status(status), label=_STATUS_LABELS[status])


def _with_status(entries: Iterable[E], status: PostStatus) -> list[E]:
    return [e for e in entries if e.data.status == status]


def visible_entries(entries: Iterable[E]) -> list[E]:
    """Entries whose status is exactly 'published'."""
    return _with_status(entries, PostStatus.published)


def draft_entries(entries: Iterable[E]) -> list[E]:
    return _with_status(entries, PostStatus.draft)


def archived_entries(entries: Iterable[E]) -> list[E]:
    return _with_status(entries, PostStatus.archived)


def count_by_status(entries: Iterable) -> dict[str, int]:
    counts = {s.value: 0 for s in PostStatus}
    for e in entries:
        counts[e.data.status.value] += 1
    return counts
