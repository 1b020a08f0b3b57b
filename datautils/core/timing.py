"""
Named timers for measuring code sections while debugging performance.

    timing.start("import")
    ...
    timing.elapsed("import", "customers loaded")   # logs "import - customers loaded Timing: 42ms"
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Dict, Optional

from datautils.errors import UnknownEntityError

_log = logging.getLogger("datautils.timing")

_clock = time.time
_lock = threading.Lock()
_start_times: Dict[str, float] = {}


def start(key: str) -> None:
    """Start, or restart, the timer for key."""
    with _lock:
        _start_times[key] = _clock()


def get_elapsed(key: str) -> int:
    """Milliseconds since start(key); raises UnknownEntityError if it was never started."""
    with _lock:
        started = _start_times.get(key)
    if started is None:
        raise UnknownEntityError(f"Timer {key!r} was never started", details={"key": key})
    return int((_clock() - started) * 1000)


def elapsed(key: str, legend: Optional[str] = None) -> int:
    """Log the elapsed time for key at INFO and return it."""
    ms = get_elapsed(key)
    _log.info("%s - %s Timing: %dms", key, legend or "", ms)
    return ms


def reset() -> None:
    """Test helper: forget every timer."""
    with _lock:
        _start_times.clear()
