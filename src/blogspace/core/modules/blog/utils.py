"""Text helpers for blog slugs, excerpts and reading time."""

import math
import re
import unicodedata

EXCERPT_LENGTH = 150
WORDS_PER_MINUTE = 200

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Turn a title into a URL-safe slug, e.g. "Hello, World!" -> "hello-world"."""
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _NON_SLUG_CHARS.sub("-", ascii_text.lower()).strip("-")


def make_excerpt(content: str, length: int = EXCERPT_LENGTH) -> str:
    """Collapse whitespace and cut the content to `length` characters, adding an ellipsis."""
    text = " ".join(content.split())
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "..."


def estimate_read_time(content: str) -> int:
    """Reading time in whole minutes, never less than one."""
    words = len(content.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def normalize_tags(tags: list[str]) -> list[str]:
    """Strip, lowercase and de-duplicate tags, keeping first occurrence order."""
    result: list[str] = []
    for tag in tags:
        value = tag.strip().lower()
        if value and value not in result:
            result.append(value)
    return result
