"""Bounded caches for converted dark-mode stylesheets.

Both caches are keyed by content only.  Callers own invalidation: clear
them whenever the theme list or the active custom CSS changes.
"""

from __future__ import annotations

import hashlib
from collections import OrderedDict
from typing import Callable

from pressroom.config import CONVERSION_MARKER


def css_key(css: str) -> str:
    """Content key for *css*: its length plus a SHA-1 digest."""
    digest = hashlib.sha1(css.encode("utf-8")).hexdigest()
    return f"{len(css)}:{digest}"


class ConversionCache:
    """FIFO-bounded ``key -> converted css`` map.

    The first value stored for a key wins; once *limit* entries are held the
    oldest insertion is evicted.
    """

    def __init__(self, limit: int = 200) -> None:
        if limit < 1:
            raise ValueError("ConversionCache limit must be at least 1")
        self.limit = limit
        self._entries: OrderedDict[str, str] = OrderedDict()

    def get(self, key: str) -> str | None:
        return self._entries.get(key)

    def put(self, key: str, value: str) -> None:
        if key in self._entries:
            return
        self._entries[key] = value
        while len(self._entries) > self.limit:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ConversionCache(entries={len(self._entries)}, limit={self.limit})"


class DarkThemeCache:
    """Per-theme cache of dark stylesheets, keyed by theme id and content."""

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def get_css(self, theme_id: str, css: str, convert: Callable[[str], str]) -> str:
        """Return the dark form of *css* for *theme_id*, converting on a miss.

        CSS that already carries the conversion marker is stored unchanged.
        """
        key = f"{theme_id}:{css_key(css)}"
        cached = self._entries.get(key)
        if cached is not None:
            return cached
        converted = css if CONVERSION_MARKER in css else convert(css)
        self._entries[key] = converted
        return converted

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
