"""Loading Twee source text from disk or over HTTP.

    read_twee(path)   — local file
    fetch_twee(url)   — HTTP GET via httpx
    load_twee(source) — either of the above (``://`` means URL), then parse

All failures surface as StorySourceError.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from twee_story.errors import StorySourceError
from twee_story.models import Document
from twee_story.twee import parse_twee

logger = logging.getLogger(__name__)


def read_twee(path: str | Path) -> str:
    path = Path(path)
    if not path.is_file():
        raise StorySourceError(f"Twee file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StorySourceError(f"Cannot read {path}: {e}") from e


async def fetch_twee(url: str, timeout: float = 30.0) -> str:
    logger.debug("fetch twee url=%s", url)
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.get(url)
            resp.raise_for_status()
    except httpx.ConnectError as e:
        raise StorySourceError(f"Cannot connect to {url}") from e
    except httpx.HTTPStatusError as e:
        raise StorySourceError(
            f"Fetching {url} returned HTTP {e.response.status_code}"
        ) from e
    except httpx.TimeoutException as e:
        raise StorySourceError(f"Fetching {url} timed out after {timeout}s") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise StorySourceError(f"Fetching {url} failed: {e}") from e
    return resp.text


async def load_twee(source: str, timeout: float = 30.0) -> Document:
    """Read or fetch a Twee document and parse it."""
    if "://" in source:
        text = await fetch_twee(source, timeout=timeout)
    else:
        text = read_twee(source)
    return parse_twee(text)
