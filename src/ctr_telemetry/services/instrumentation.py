from __future__ import annotations

import functools
import time
from typing import Any, Callable, TypeVar

from prometheus_client import Counter, Histogram

F = TypeVar("F", bound=Callable[..., Any])

OPERATIONS = Counter(
    "ctr_telemetry_operations_total",
    "Number of stats operations served, by operation",
    ["operation"],
)
OPERATION_ERRORS = Counter(
    "ctr_telemetry_operation_errors_total",
    "Number of stats operations that failed, by operation",
    ["operation"],
)
OPERATION_LATENCY = Histogram(
    "ctr_telemetry_operation_latency_seconds",
    "Latency of stats operations, by operation",
    ["operation"],
)


def instrumented(operation: str) -> Callable[[F], F]:
    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            except Exception:
                OPERATION_ERRORS.labels(operation=operation).inc()
                raise
            finally:
                OPERATIONS.labels(operation=operation).inc()
                OPERATION_LATENCY.labels(operation=operation).observe(time.perf_counter() - start)

        return wrapper  # type: ignore[return-value]

    return decorator
