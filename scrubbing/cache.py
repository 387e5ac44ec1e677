"""
ResultCache - Bounded LRU memo of scrubbed text, keyed by SHA-256 digest.

The raw input is never stored, so a heap dump of the cache cannot map a
secret back to itself.
"""

import hashlib
from collections import OrderedDict
from typing import Optional

DEFAULT_MAX_ENTRIES = 1000


def hash_input(text: str) -> str:
    """SHA-256 hex digest of text (lone surrogates are hashed, not rejected)."""
    return hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()


class ResultCache:
    """
    Least-recently-used cache of `digest -> scrubbed text`.

    Example:
        cache = ResultCache(max_entries=2)
        cache.put(hash_input("a=b"), "a=b")
        cache.get(hash_input("a=b"))   # "a=b"
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, str] = OrderedDict()

    def get(self, digest: str) -> Optional[str]:
        value = self._entries.get(digest)
        if value is not None:
            self._entries.move_to_end(digest)
        return value

    def put(self, digest: str, value: str) -> None:
        self._entries[digest] = value
        self._entries.move_to_end(digest)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, digest: str) -> bool:
        return digest in self._entries
