from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Callable, List, Optional

from datautils.errors import SortConversionUnavailable
from datautils.observability import metrics
from datautils.sorting.loader import SortConversionEntry, load_sort_conversion

_log = logging.getLogger("datautils.sorting")

Loader = Callable[[], List[SortConversionEntry]]


class SortConversionCache:
    """
    Process-scoped, load-once holder for the sort conversion table.

    Concurrent first callers share a single fetch: the first caller publishes
    an in-flight future under the lock and runs the loader, the others wait
    on that future. A failed fetch is raised as SortConversionUnavailable to
    the caller and to everyone waiting on it; nothing is cached, so a call
    made after the failure fetches again.
    """

    def __init__(self, loader: Optional[Loader] = None):
        self._loader: Loader = loader or load_sort_conversion
        self._lock = threading.Lock()
        self._entries: Optional[List[SortConversionEntry]] = None
        self._inflight: Optional[Future] = None
        self.fetch_count = 0

    @property
    def is_loaded(self) -> bool:
        return self._entries is not None

    def get(self) -> List[SortConversionEntry]:
        entries = self._entries
        if entries is not None:
            return entries

        with self._lock:
            if self._entries is not None:
                return self._entries
            if self._inflight is not None:
                pending = self._inflight
                owner = False
            else:
                pending = self._inflight = Future()
                loader = self._loader
                self.fetch_count += 1
                owner = True

        if not owner:
            return pending.result()

        try:
            loaded = list(loader())
        except Exception as exc:
            _log.error("Unable to retrieve sort conversion table: %s", exc)
            metrics.inc_sort_conversion_load("failure")
            if isinstance(exc, SortConversionUnavailable):
                error = exc
            else:
                error = SortConversionUnavailable(f"Unable to retrieve sort conversion table: {exc}")
                error.__cause__ = exc
            with self._lock:
                if self._inflight is pending:
                    self._inflight = None
            pending.set_exception(error)
            raise error

        metrics.inc_sort_conversion_load("success")
        with self._lock:
            if self._inflight is pending:
                self._entries = loaded
                self._inflight = None
        pending.set_result(loaded)
        return loaded

    def set_loader(self, loader: Loader) -> None:
        with self._lock:
            self._loader = loader
            self._entries = None
            self._inflight = None

    def reset(self) -> None:
        """Test helper: forget the cached table so the next get() fetches again."""
        with self._lock:
            self._entries = None
            self._inflight = None
            self.fetch_count = 0


default_cache = SortConversionCache()
