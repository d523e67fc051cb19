from __future__ import annotations

"""Progress reporting primitives.

The engine must remain runnable without any specific UI. Long-running loops
(bagging resamples, cross-validation folds, the experiment driver) optionally
accept a progress callback.
"""

from typing import Optional, Protocol


class ProgressCallback(Protocol):
    """A minimal progress reporting interface."""

    def init(self, *, total: int, label: Optional[str] = None) -> None:  # pragma: no cover
        ...

    def update(self, *, current: int, label: Optional[str] = None) -> None:  # pragma: no cover
        ...

    def finalize(self, *, label: Optional[str] = None) -> None:  # pragma: no cover
        ...


class LoggingProgress:
    """ProgressCallback that reports through a standard library logger."""

    def __init__(self, logger, *, every: int = 10):
        self._logger = logger
        self._every = max(1, int(every))
        self._total = 0

    def init(self, *, total: int, label: Optional[str] = None) -> None:
        self._total = int(total)
        self._logger.info("%s: starting (%d units)", label or "progress", self._total)

    def update(self, *, current: int, label: Optional[str] = None) -> None:
        if current == self._total or current % self._every == 0:
            self._logger.info("%s: %d/%d", label or "progress", current, self._total)

    def finalize(self, *, label: Optional[str] = None) -> None:
        self._logger.info("%s: done", label or "progress")
