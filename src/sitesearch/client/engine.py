"""Client pagination/display engine over the static search artifact"""

from enum import Enum
from functools import partial
from pathlib import Path
from typing import Any, Callable, Optional

from babel import Locale, UnknownLocaleError

from sitesearch.client.fetch import fetch_json
from sitesearch.client.pagination import paginate, total_pages
from sitesearch.client.render import pagination_controls, parse_date, render_card, render_pagination
from sitesearch.client.view import DisplayView, PageControl
from sitesearch.core.errors import ClientFetchError, ClientParseError, SearchClientError
from sitesearch.core.log import GroupLogger


Fetcher = Callable[[str], Any]


class EngineState(str, Enum):
    uninitialized = "uninitialized"
    loading = "loading"
    ready = "ready"
    failed = "failed"


def publish_timestamp(post: dict) -> float:
    """Sort key: POSIX timestamp of publishedDate, 0 (epoch) when missing or invalid."""
    parsed = parse_date(post.get("publishedDate"))
    return parsed.timestamp() if parsed else 0.0


def sort_newest_first(posts: list[dict]) -> list[dict]:
    return sorted(posts, key=publish_timestamp, reverse=True)


class PaginationEngine:
    """Holds a newest-first copy of the index and keeps cards and page controls in sync.

    Pagination is an in-memory slice; only load() touches the network. Public
    methods never raise: load failures degrade to an empty result set and
    out-of-range page requests are ignored.
    """

    def __init__(
        self,
        source: str | Path,
        view: Optional[DisplayView] = None,
        fetcher: Optional[Fetcher] = None,
        logger: Optional[GroupLogger] = None,
        current_page: int = 1,
        posts_per_page: int = 6,
        max_visible_pages: int = 10,
        locale: str = "id_ID",
        link_base: str = "/docs",
        fetch_timeout: float = 10.0,
        ):
        if posts_per_page < 1:
            raise ValueError("posts_per_page must be >= 1")
        try:
            Locale.parse(locale)
        except (UnknownLocaleError, ValueError) as e:
            raise ValueError(f"Unknown locale {locale!r}") from e
        self.source = str(source)
        self.view = view or DisplayView()
        self.fetcher = fetcher or partial(fetch_json, timeout=fetch_timeout)
        self.logger = logger or GroupLogger()
        self.current_page = current_page
        self.posts_per_page = posts_per_page
        self.max_visible_pages = max_visible_pages
        self.locale = locale
        self.link_base = link_base
        self.sorted_posts: list[dict] = []
        self.state = EngineState.uninitialized
        self.error: Optional[SearchClientError] = None

    def is_ready(self) -> bool:
        return self.state == EngineState.ready

    def _fetch(self) -> Any:
        """Call the fetcher, folding unexpected failures into ClientFetchError."""
        try:
            return self.fetcher(self.source)
        except SearchClientError:
            raise
        except Exception as e:
            raise ClientFetchError(f"Failed to load {self.source}: {e}") from e

    def load(self) -> EngineState:
        """Fetch the artifact, validate it is an array of records, and sort newest-first."""
        self.state = EngineState.loading
        self.error = None
        try:
            payload = self._fetch()
            if not isinstance(payload, list):
                raise ClientParseError("Invalid data format: expected array")
            if not all(isinstance(p, dict) for p in payload):
                raise ClientParseError("Invalid data format: expected array of objects")
        except SearchClientError as e:
            self.logger.log(f"Error loading content data: {e}", "error")
            self.sorted_posts = []
            self.error = e
            self.state = EngineState.failed
            return self.state

        self.sorted_posts = sort_newest_first(payload)
        self.logger.log(f"Loaded {len(self.sorted_posts)} posts")
        self.state = EngineState.ready
        return self.state

    def total_pages(self) -> int:
        return total_pages(len(self.sorted_posts), self.posts_per_page)

    def change_page(self, page: int) -> None:
        if page < 1 or page > self.total_pages():
            return
        self.current_page = page
        self.update_display()

    def on_page_control(self, control: PageControl) -> None:
        """Click handler for a rendered page control."""
        self.change_page(control.page)

    def current_window(self) -> list[dict]:
        return paginate(self.sorted_posts, self.current_page, self.posts_per_page).items

    def update_display(self) -> None:
        self.update_content_display()
        self.update_pagination_ui()

    def update_content_display(self) -> None:
        """Hide every pooled card, then fill and show one card per record in the window."""
        if not self.sorted_posts:
            self.logger.log("No posts data available", "warning")
            return

        content = self.view.content
        content.hide_all()
        for index, post in enumerate(self.current_window()):
            card = content.card_at(index)
            card.html = render_card(post, self.locale, self.link_base)
            card.visible = True

    def update_pagination_ui(self) -> None:
        controls = pagination_controls(self.current_page, self.total_pages(), self.max_visible_pages)
        self.view.pagination.controls = controls
        self.view.pagination.html = render_pagination(controls)
