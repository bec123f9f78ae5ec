import logging
import time
from typing import List, Optional, Tuple

from referencedata.config import settings


class StepProfiler:
    """
    Times the named steps of one operation and logs them on stop().

        profiler = StepProfiler("FTAP_SEARCH", logger)
        profiler.start("RESOLVE_IDENTITIES")
        ...
        profiler.start("HYDRATE")
        ...
        profiler.stop()
    """

    def __init__(self, name: str, logger: logging.Logger):
        self.name = name
        self._logger = logger
        self._steps: List[Tuple[str, float]] = []
        self._current: Optional[str] = None
        self._started_at = 0.0
        self._stopped = False

    def start(self, step: str) -> None:
        self._close_current()
        self._current = step
        self._started_at = time.perf_counter()

    def stop(self) -> List[Tuple[str, float]]:
        if self._stopped:
            return self._steps
        self._close_current()
        self._stopped = True
        if settings.SEARCH_PROFILING_ENABLED and self._logger.isEnabledFor(logging.DEBUG):
            total_ms = sum(ms for _, ms in self._steps)
            self._logger.debug(
                "profiler name=%s total_ms=%.2f steps=%s",
                self.name,
                total_ms,
                " ".join(f"{step}={ms:.2f}" for step, ms in self._steps),
            )
        return self._steps

    def _close_current(self) -> None:
        if self._current is None:
            return
        self._steps.append((self._current, (time.perf_counter() - self._started_at) * 1000))
        self._current = None
