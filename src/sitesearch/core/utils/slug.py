"""Slug generation for content entry identifiers"""

import re
from pathlib import PurePosixPath


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def slugify_path(relative: PurePosixPath) -> str:
    """Slug for a file inside a collection: each directory segment slugified, joined by '/'."""
    parts = [*relative.parent.parts, relative.stem] if relative.parent.parts else [relative.stem]
    return "/".join(s for s in (slugify(p) for p in parts) if s)
