"""Shared fixtures: isolated caches and a counting member enumerator."""

from __future__ import annotations

import threading
import time
from collections import Counter

import pytest

from mirror import MetaCache, Members, Reflect


class CountingMembers(Members):
    """Member enumerator that records how often each type level is enumerated."""

    def __init__(self, delay: float = 0.0) -> None:
        super().__init__(dunders=False)
        self.calls: Counter = Counter()
        self._delay = delay
        self._lock = threading.Lock()

    def declared(self, type_):
        with self._lock:
            self.calls[type_] += 1
        if self._delay:
            time.sleep(self._delay)
        return super().declared(type_)


@pytest.fixture
def members() -> CountingMembers:
    return CountingMembers()


@pytest.fixture
def cache(members: CountingMembers) -> MetaCache:
    return MetaCache(members)


@pytest.fixture
def reflect(cache: MetaCache) -> Reflect:
    return Reflect(cache)
