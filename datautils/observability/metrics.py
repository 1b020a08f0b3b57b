from __future__ import annotations

from collections import Counter
from typing import Dict

from prometheus_client import Counter as PromCounter

# In-process counters, readable without a prometheus scrape
_NAMED = Counter()

_PROM_SORT_CONVERSION_LOADS = PromCounter(
    "datautils_sort_conversion_loads_total",
    "Sort conversion table fetches",
    ["outcome"],
)


def reset_metrics() -> None:
    """
    Test helper: clears the in-process counters to avoid cross-test leakage.
    Prometheus counters are monotonic and are left alone.
    """
    _NAMED.clear()


def inc_sort_conversion_load(outcome: str) -> None:
    _NAMED[f"sort_conversion_loads_{outcome}"] += 1
    _PROM_SORT_CONVERSION_LOADS.labels(outcome=outcome).inc()


def inc_named(name: str, value: int = 1) -> None:
    if not name:
        return
    _NAMED[name] += int(value)


def snapshot() -> Dict[str, int]:
    return dict(_NAMED)
