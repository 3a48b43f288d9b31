#
# mirror.concurrent::Lock
# Mutual exclusion lock
#

import threading


class Lock:
    """Reentrant mutual exclusion lock, used as `with lock:`."""

    def __init__(self):
        self._lock = threading.RLock()

    def lock(self):
        """Acquire the lock; if not available then block until available."""
        self._lock.acquire()

    def unlock(self):
        """Release the lock. Raise Err if not holding the lock."""
        try:
            self._lock.release()
        except RuntimeError as e:
            from ..Err import Err
            raise Err.make(f"Cannot unlock: {e}", e)

    def __enter__(self):
        self.lock()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.unlock()
        return False

    def toStr(self):
        return "Lock"

    def __str__(self):
        return self.toStr()
