from __future__ import annotations

from collections import Counter
from typing import Dict

from prometheus_client import Counter as PromCounter

# Named counters (custom)
_NAMED = Counter()

_PROM_LIST_PROPERTIES = PromCounter(
    "buildergen_list_properties_total",
    "List properties seen by the list property factory",
    ["outcome", "field"],
)


def reset_metrics() -> None:
    """
    Test helper: clears all counters to avoid cross-test leakage.
    Safe to call multiple times.
    """
    _NAMED.clear()


def inc_named(name: str, value: int = 1) -> None:
    """
    Increment a named counter (used by generators, health endpoints, etc.).
    """
    if not name:
        return
    _NAMED[name] += int(value)


def record_list_property(outcome: str, field: str) -> None:
    _PROM_LIST_PROPERTIES.labels(outcome=outcome, field=field).inc()


def snapshot_named() -> Dict[str, int]:
    return dict(_NAMED)
