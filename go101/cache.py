"""A thread-safe store of rendered pages keyed by group and name."""

from __future__ import annotations

import threading


class PageCache:
    """Rendered pages keyed by ``(group, name)``."""

    def __init__(self):
        self._lock = threading.Lock()
        self._pages = {}

    def get(self, group, name):
        """Return the cached page, or None when there is none."""
        with self._lock:
            return self._pages.get((group, name))

    def set(self, group, name, page):
        """Store a page."""
        with self._lock:
            self._pages[(group, name)] = page

    def clear(self):
        """Drop every cached page."""
        with self._lock:
            self._pages = {}

    def __len__(self):
        with self._lock:
            return len(self._pages)