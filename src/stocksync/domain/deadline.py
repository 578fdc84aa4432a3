"""Overall run deadline shared by the pipeline stages."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

DEADLINE_EXCEEDED = "deadline exceeded"


@dataclass(frozen=True, slots=True)
class RunDeadline:
    expires_at: float
    clock: Callable[[], float] = field(default=time.monotonic, compare=False)

    @classmethod
    def after(
        cls,
        seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> RunDeadline:
        return cls(expires_at=clock() + seconds, clock=clock)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self.clock())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0


def remaining_seconds(deadline: RunDeadline | None) -> float | None:
    """Seconds left before ``deadline``; ``None`` means unbounded (for ``asyncio.timeout``)."""

    return None if deadline is None else deadline.remaining()


def is_expired(deadline: RunDeadline | None) -> bool:
    return deadline is not None and deadline.expired
