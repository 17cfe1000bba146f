import logging
import threading
from typing import Dict, Hashable, Optional, Sequence, Tuple

log = logging.getLogger("cache")

DEFAULT_CACHE_MAX = 256


class ResultCache:
    """Bounded memo of lookup results.

    There is no per-entry eviction: once a new entry would push the cache past
    its capacity, everything is dropped and the entry goes into an empty cache.
    A capacity of 0 disables caching.
    """

    def __init__(self, capacity: int = DEFAULT_CACHE_MAX):
        self.capacity = capacity
        self._data: Dict[Hashable, Tuple[str, ...]] = {}
        self._lock = threading.Lock()
        self.clears = 0

    @property
    def enabled(self) -> bool:
        return self.capacity > 0

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: Hashable) -> Optional[Tuple[str, ...]]:
        if not self.enabled:
            return None
        with self._lock:
            return self._data.get(key)

    def put(self, key: Hashable, result: Sequence[str]) -> None:
        if not self.enabled:
            return
        with self._lock:
            if key not in self._data and len(self._data) >= self.capacity:
                log.debug("Result cache full (%d entries), clearing", len(self._data))
                self._data = {}
                self.clears += 1
            self._data[key] = tuple(result)

    def clear(self) -> None:
        with self._lock:
            self._data = {}
