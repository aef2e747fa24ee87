from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class FrameError:
    context: str
    message: str
    traceback: str
    # Simulated time (seconds) of the first and latest occurrence.
    first_at: float
    last_at: float
    count: int = 1

    def summary_line(self) -> str:
        line = f"{self.context} @ t={self.first_at:.2f}s: {self.message}"
        if self.count > 1:
            line += f" (x{self.count}, last t={self.last_at:.2f}s)"
        return line


class ErrorLog:
    """
    Recent failures caught by the frame loop, tagged with simulated time.

    A broken step usually fails again on every frame, so a repeat of the latest
    (context, message) only bumps its count and `last_at`. New entries go to `logging`
    at ERROR with the traceback; repeats stay silent.
    """

    def __init__(self, *, max_items: int = 30) -> None:
        self._max_items = max(1, int(max_items))
        self._items: list[FrameError] = []

    def items(self) -> list[FrameError]:
        return list(self._items)

    def latest(self) -> FrameError | None:
        return self._items[-1] if self._items else None

    def log_exception(self, *, context: str, exc: BaseException, sim_time: float = 0.0) -> FrameError:
        message = f"{type(exc).__name__}: {exc}".strip()
        at = float(sim_time)
        last = self.latest()
        if last is not None and (last.context, last.message) == (context, message):
            last.count += 1
            last.last_at = at
            return last

        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        item = FrameError(context=context, message=message, traceback=tb, first_at=at, last_at=at)
        self._items.append(item)
        del self._items[: -self._max_items]
        logger.error("%s at t=%.3f: %s\n%s", context, at, message, tb.rstrip())
        return item
