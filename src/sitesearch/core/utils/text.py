"""Plain-text cleaning and counting for searchable content"""

import re


TAG_RE = re.compile(r'<[^>]*>')
ENTITY_RE = re.compile(r'&[^;]+;')
NEWLINES_RE = re.compile(r'\n+')
WHITESPACE_RE = re.compile(r'\s+')

CODE_FENCE = "```"
IMAGE_MARKER = "!["


def sanitize_content(source: str | None) -> str:
    """Strip markup tags and entities, collapse whitespace, trim. Idempotent."""
    content = source or ''
    content = TAG_RE.sub(' ', content)
    content = ENTITY_RE.sub(' ', content)
    content = NEWLINES_RE.sub(' ', content)
    content = WHITESPACE_RE.sub(' ', content)
    return content.strip()


def count_words(text: str) -> int:
    """Number of maximal non-whitespace runs in text."""
    return len(text.split())


def has_code_blocks(raw: str) -> bool:
    return CODE_FENCE in raw


def has_images(raw: str) -> bool:
    return IMAGE_MARKER in raw
