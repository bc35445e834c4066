"""Route templates mapping content entries to site URLs"""

from sitesearch.core.errors import PathResolutionError
from sitesearch.core.models import SourceType


class PathResolver:
    """Resolves (source, slug) to a URL from templates using `{slug}` and `{tool}` placeholders."""

    def __init__(self, routes: dict[str, str]):
        self.routes = dict(routes)

    def resolve(self, source: SourceType | str, slug: str, tool: str | None = None) -> str:
        key = source.value if isinstance(source, SourceType) else source
        template = self.routes.get(key)
        if not template:
            raise PathResolutionError(key, slug, "no route mapping")
        if "{tool}" in template and not tool:
            raise PathResolutionError(key, slug, "route needs a tool name")
        try:
            return template.format(slug=slug, tool=tool or "")
        except (KeyError, IndexError, ValueError) as e:
            raise PathResolutionError(key, slug, f"bad route template {template!r}: {e}") from e
