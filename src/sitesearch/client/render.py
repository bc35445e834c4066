"""Markup for post cards and pagination controls"""

import json
from datetime import datetime, timezone
from html import escape
from typing import Any, Optional

from babel.dates import format_date as babel_format_date
from markdown_it import MarkdownIt

from sitesearch.client.pagination import page_window
from sitesearch.client.view import PageControl


MAX_CARD_TAGS = 3

_inline = MarkdownIt("commonmark", {"html": False})


def parse_date(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string into an aware datetime; None when missing or invalid."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def format_date(value: Any, locale: str = "id_ID") -> str:
    """Long, locale-formatted date ('1 Januari 2024' for id_ID); '' for missing or invalid input."""
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return babel_format_date(parsed.date(), format="long", locale=locale)


def inline_markdown(text: str) -> str:
    """Render inline markdown with raw HTML escaped."""
    return _inline.renderInline(text or "")


def _text(value: Any) -> str:
    """Any JSON value as display text; None is empty."""
    return "" if value is None else str(value)


def card_link(post: dict, link_base: str = "/docs") -> str:
    return _text(post.get("url")) or f"{link_base}/{_text(post.get('slug'))}"


def render_card(post: dict, locale: str = "id_ID", link_base: str = "/docs") -> str:
    raw_tags = post.get("tags")
    tags = [str(t) for t in raw_tags] if isinstance(raw_tags, list) else []
    href = escape(card_link(post, link_base), quote=True)
    parts = []
    emoji = _text(post.get("emoji"))
    if emoji:
        parts.append(f'<div class="post-emoji">{escape(emoji)}</div>')
    parts.append('<div class="post-card-container">')
    parts.append('<div class="post-header">')
    parts.append(
        f'<h2 class="post-title"><a href="{href}">{inline_markdown(_text(post.get("title")) or "Untitled")}</a></h2>'
    )
    parts.append(
        f'<div class="post-meta"><span class="post-date">{format_date(post.get("publishedDate"), locale)}</span></div>'
    )
    parts.append('</div>')
    parts.append(f'<p class="post-description">{inline_markdown(_text(post.get("description")))}</p>')
    parts.append(f'<div class="post-tags" data-all-tags="{escape(json.dumps(tags), quote=True)}">')
    parts.extend(f'<span class="post-tag">{escape(t)}</span>' for t in tags[:MAX_CARD_TAGS])
    if len(tags) > MAX_CARD_TAGS:
        extra = len(tags) - MAX_CARD_TAGS
        parts.append(f'<span class="post-tag-more" data-count="{extra}">+{extra}</span>')
    parts.append('</div>')
    parts.append(f'<a href="{href}" class="read-more-btn">Read more &rarr;</a>')
    parts.append('</div>')
    return "\n".join(parts)


def pagination_controls(current: int, pages: int, max_visible: int = 10) -> list[PageControl]:
    """Previous, a bounded window of page numbers, Next."""
    controls = []
    if current > 1:
        controls.append(PageControl(page=current - 1, label="← Previous"))
    controls.extend(
        PageControl(page=i, label=str(i), active=(i == current))
        for i in page_window(current, pages, max_visible)
    )
    if current < pages:
        controls.append(PageControl(page=current + 1, label="Next →"))
    return controls


def render_pagination(controls: list[PageControl]) -> str:
    buttons = []
    for c in controls:
        active = " active" if c.active else ""
        current = ' aria-current="page"' if c.active else ""
        buttons.append(
            f'<button class="pagination-btn{active}" data-page="{c.page}"{current}>{escape(c.label)}</button>'
        )
    return (
        '<div class="pagination" role="navigation" aria-label="Pagination">'
        + "".join(buttons)
        + '</div>'
    )
