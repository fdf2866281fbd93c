"""Latency instrumentation for translation, transcription and OCR calls."""
import time
from contextlib import contextmanager
from collections import defaultdict, deque

# Rolling window per timer; stats cover the most recent samples only
WINDOW_SIZE = 1000

_timers = defaultdict(lambda: deque(maxlen=WINDOW_SIZE))


@contextmanager
def record_latency(name: str):
    start = time.perf_counter()
    try:
        yield
    finally:
        _timers[name].append((time.perf_counter() - start) * 1000.0)


def snapshot_latency_stats() -> dict:
    snapshot = {}
    for name, values in _timers.items():
        sorted_vals = sorted(values)
        count = len(sorted_vals)
        if not count:
            continue

        def _percentile(p: float) -> float:
            idx = int(round(p * (count - 1)))
            return sorted_vals[idx]

        snapshot[name] = {
            "count": count,
            "avg_ms": sum(sorted_vals) / count,
            "p95_ms": _percentile(0.95),
            "p99_ms": _percentile(0.99),
        }
    return snapshot


def reset_latency_stats() -> None:
    _timers.clear()
