"""Fetch the search artifact from a URL or a local file"""

import json
from pathlib import Path
from typing import Any

import requests

from sitesearch.core.errors import ClientFetchError, ClientParseError


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_json(source: str | Path, timeout: float = 10.0) -> Any:
    """Return the decoded JSON at source.

    Raises ClientFetchError for network/IO failures (including non-2xx responses)
    and ClientParseError when the payload is not valid JSON.
    """
    source = str(source)
    if is_url(source):
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ClientFetchError(f"Failed to fetch {source}: {e}") from e
        try:
            return response.json()
        except ValueError as e:
            raise ClientParseError(f"Invalid JSON from {source}: {e}") from e

    try:
        text = Path(source).read_text(encoding="utf-8")
    except OSError as e:
        raise ClientFetchError(f"Failed to read {source}: {e}") from e
    except UnicodeDecodeError as e:
        raise ClientParseError(f"Invalid UTF-8 in {source}: {e}") from e
    try:
        return json.loads(text)
    except ValueError as e:
        raise ClientParseError(f"Invalid JSON in {source}: {e}") from e
