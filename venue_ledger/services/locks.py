"""Per-account mutual exclusion"""

import threading
import weakref


class AccountLockRegistry:
    """
    Hands out one lock per account; different accounts never contend.

    Locks are held weakly: once no caller references an account's lock,
    nobody can be waiting on it and the entry drops out of the registry.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()

    def __len__(self) -> int:
        return len(self._locks)

    def for_account(self, account_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(account_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[account_id] = lock
            return lock
