"""
Storage seams used around the engine.

KeyValueStore is the interface the host application provides for
persistence (string keys, JSON string values, namespaced per user).
GenerationCache is an explicit, injectable memo for generator results; the
engine itself keeps no global cache.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from typing import Callable, Dict, Hashable, Optional, Protocol, Tuple, runtime_checkable

from . import config

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryStore:
    """Dict-backed KeyValueStore, for tests and single-process use."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key):
        return self._data.get(key)

    def set(self, key, value):
        self._data[key] = value

    def delete(self, key):
        self._data.pop(key, None)

    def keys(self):
        return sorted(self._data)


def namespaced_key(user_id: str, key: str) -> str:
    if not user_id:
        raise ValueError("user_id must be a non-empty string")
    return f"{user_id}:{key}"


class GenerationCache:
    """
    Bounded memo keyed by tuples. Oldest entries are evicted first; entries
    older than max_age seconds are treated as missing.
    """

    def __init__(self, max_entries=config.CACHE_MAX_ENTRIES,
                 max_age=config.CACHE_MAX_AGE_SECS,
                 clock: Callable[[], float] = time.monotonic):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.max_age = max_age
        self._clock = clock
        self._entries: "OrderedDict[Tuple[Hashable, ...], Tuple[float, object]]" = OrderedDict()

    def get(self, key):
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self.max_age is not None and self._clock() - stored_at > self.max_age:
            self.evict(key)
            return None
        return value

    def set(self, key, value):
        self._entries.pop(key, None)
        self._entries[key] = (self._clock(), value)
        while len(self._entries) > self.max_entries:
            oldest, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cache entry %s", oldest)

    def evict(self, key):
        self._entries.pop(key, None)

    def clear(self):
        self._entries.clear()

    def __contains__(self, key):
        return self.get(key) is not None

    def __len__(self):
        return len(self._entries)
