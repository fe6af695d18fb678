# backend/drivebook/services/base.py
"""
Base Service Pattern for the availability backend.

Provides common functionality for service classes:
- Logging
- Settings injection
- Performance monitoring (slow-operation warnings and Prometheus histograms)
"""

import asyncio
from functools import wraps
import logging
import time
from typing import Any, Callable, Dict, Optional, TypeVar, cast

from ..core.config import Settings, settings as default_settings
from ..core.metrics import SERVICE_OPERATION_DURATION_SECONDS

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class BaseService:
    """
    Base class for service layer components.

    Services here are stateless with respect to persisted data; the only
    per-instance state is the settings snapshot and in-process timing stats.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or default_settings
        self.logger = logging.getLogger(self.__class__.__name__)
        self._metrics: Dict[str, Dict[str, float]] = {}

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Decorator to measure operation performance.

        Usage:
            @BaseService.measure_operation("get_available_slots")
            async def get_available_slots(self, request):
                ...
        """

        def decorator(func: F) -> F:
            if asyncio.iscoroutinefunction(func):

                @wraps(func)
                async def async_wrapper(self: "BaseService", *args: Any, **kwargs: Any) -> Any:
                    start_time = time.perf_counter()
                    success = False
                    try:
                        result = await func(self, *args, **kwargs)
                        success = True
                        return result
                    finally:
                        self._finish_operation(operation_name, time.perf_counter() - start_time, success)

                return cast(F, async_wrapper)

            @wraps(func)
            def wrapper(self: "BaseService", *args: Any, **kwargs: Any) -> Any:
                start_time = time.perf_counter()
                success = False
                try:
                    result = func(self, *args, **kwargs)
                    success = True
                    return result
                finally:
                    self._finish_operation(operation_name, time.perf_counter() - start_time, success)

            return cast(F, wrapper)

        return decorator

    def _finish_operation(self, operation_name: str, elapsed: float, success: bool) -> None:
        self._record_metric(operation_name, elapsed, success)

        if elapsed > self.settings.slow_operation_threshold_seconds:
            self.logger.warning(f"Slow operation detected: {operation_name} took {elapsed:.2f}s")

        SERVICE_OPERATION_DURATION_SECONDS.labels(
            service=self.__class__.__name__, operation=operation_name
        ).observe(elapsed)

    def _record_metric(self, operation_name: str, elapsed: float, success: bool) -> None:
        stats = self._metrics.setdefault(
            operation_name, {"count": 0, "total_time": 0.0, "failures": 0}
        )
        stats["count"] += 1
        stats["total_time"] += elapsed
        if not success:
            stats["failures"] += 1

    def get_metrics(self) -> Dict[str, Dict[str, float]]:
        """Return per-operation call counts, failures and average duration."""
        result: Dict[str, Dict[str, float]] = {}
        for name, stats in self._metrics.items():
            count = stats["count"]
            result[name] = {
                "count": count,
                "failures": stats["failures"],
                "avg_time": stats["total_time"] / count if count else 0.0,
            }
        return result
