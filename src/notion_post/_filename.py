"""Deterministic, URL-safe filenames for posts."""

from __future__ import annotations

import re
import unicodedata
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import datetime

# Letters NFKD does not decompose to ASCII
_TRANSLITERATIONS = str.maketrans(
    {
        "ß": "ss",
        "æ": "ae",
        "Æ": "AE",
        "œ": "oe",
        "Œ": "OE",
        "ø": "o",
        "Ø": "O",
        "đ": "d",
        "Đ": "D",
        "ł": "l",
        "Ł": "L",
        "þ": "th",
        "Þ": "TH",
        "&": " and ",
    },
)


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated ASCII slug."""
    text = unicodedata.normalize("NFKD", text.translate(_TRANSLITERATIONS))
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    text = re.sub(r"[^a-z0-9\s_-]", "", text)
    text = re.sub(r"[\s_]+", "-", text)
    return re.sub(r"-+", "-", text).strip("-")


def post_filename(title: str, date: datetime.date) -> str:
    """Build the ``{YYYY-MM-DD}-{slug}.md`` filename for a post.

    >>> import datetime
    >>> post_filename("Hello, World!", datetime.date(2024, 1, 1))
    '2024-01-01-hello-world.md'
    """
    return f"{date.isoformat()}-{slugify(title)}.md"
