#
# mirror.concurrent::ConcurrentMap
# Thread-safe map
#

import threading


class ConcurrentMap:
    """Thread-safe map wrapping a Python dict with an RLock."""

    def __init__(self):
        self._lock = threading.RLock()
        self._map = {}

    def get(self, key):
        """Get a value by its key or return None."""
        with self._lock:
            return self._map.get(key, None)

    def getOrAdd(self, key, defVal):
        """Get the value for key, or add defVal if not present; the stored value wins."""
        with self._lock:
            if key not in self._map:
                self._map[key] = defVal
            return self._map[key]
