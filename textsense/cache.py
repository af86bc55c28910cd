#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# File: cache.py
# Project: textsense
# Description: Bounded, insertion-ordered result cache
# Created: 2025-05-23 14:16:27
# Modified: 2025-06-02 20:31:58

import time
import hashlib
import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)


def make_cache_key(text: str, options_token: str) -> str:
    """
    Key for an analysis of ``text`` under the given options.

    The text is hashed exactly as given: cached results carry the original
    text and character offsets into it.
    """
    text_hash = hashlib.sha256(text.encode("utf-8")).hexdigest()
    options_hash = hashlib.sha256(options_token.encode("utf-8")).hexdigest()[:16]
    return f"{text_hash}_{options_hash}"


@dataclass(frozen=True)
class CacheEntry:
    key: str
    result: Any
    created_at: float
    cost: int = 0


class ResultCache:
    """
    Holds at most ``max_entries`` results.

    Entries are kept in insertion order, so the oldest entry is evicted in
    O(1) when the cache overflows. Entries are never replaced in place. Not
    thread-safe on its own; the engine serializes access.
    """

    def __init__(self, max_entries: int = 1000):
        if max_entries < 0:
            raise ValueError("max_entries must be >= 0")
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self.evictions = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        return entry.result if entry is not None else None

    def entry(self, key: str) -> Optional[CacheEntry]:
        return self._entries.get(key)

    def put(self, key: str, result: Any, cost: int = 0) -> bool:
        """Store a result; returns False when the key exists or caching is off."""
        if self.max_entries == 0 or key in self._entries:
            return False

        self._entries[key] = CacheEntry(
            key=key,
            result=result,
            created_at=time.time(),
            cost=cost,
        )

        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            self.evictions += 1
            logger.debug(f"Evicted cache entry {evicted[:12]}")
        return True

    @property
    def total_cost(self) -> int:
        return sum(e.cost for e in self._entries.values())

    def clear(self):
        self._entries.clear()
