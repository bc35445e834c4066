"""Exception hierarchy for index building and the client engine"""


class SearchIndexError(Exception):
    """Base class for build-time errors; `kind` is echoed in error payloads."""
    kind = "search_index_error"


class SourceFetchError(SearchIndexError):
    """A content source could not be loaded. Fatal to the whole aggregation."""
    kind = "source_fetch_failed"

    def __init__(self, source: str, cause: Exception | str):
        self.source = source
        self.cause = cause
        super().__init__(f"Failed to load '{source}' content: {cause}")


class PathResolutionError(SearchIndexError):
    """No route maps this entry; callers fall back to a synthetic path."""
    kind = "path_resolution_failed"

    def __init__(self, source: str, slug: str, reason: str):
        self.source = source
        self.slug = slug
        super().__init__(f"No route for {source}/{slug}: {reason}")


class IndexBuildError(SearchIndexError):
    """Raised by the build pipeline when the emitter reported a failure."""
    kind = "index_build_failed"

    def __init__(self, payload: dict):
        self.payload = payload
        super().__init__(payload.get("message", "index build failed"))


class SearchClientError(Exception):
    """Base class for client engine fetch/parse failures."""


class ClientFetchError(SearchClientError):
    pass


class ClientParseError(SearchClientError):
    pass
