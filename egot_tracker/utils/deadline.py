from __future__ import annotations

import time
from typing import Optional

from ..errors import DeadlineExceeded


class Deadline:
    """
    One time budget shared by every blocking call of a request chain
    (search + SPARQL + summary + persistence). Each call asks for its
    timeout through `timeout()`, which never exceeds what is left.
    """

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        self._expires_at = time.monotonic() + seconds
        self._cancelled = False

    def remaining(self) -> float:
        if self._cancelled:
            return 0.0
        return max(0.0, self._expires_at - time.monotonic())

    def expired(self) -> bool:
        return self.remaining() <= 0.0

    def cancel(self) -> None:
        self._cancelled = True

    def check(self, what: str = "request") -> None:
        if self.expired():
            raise DeadlineExceeded(f"Deadline of {self.seconds:.1f}s exceeded during {what}")

    def timeout(self, per_call: Optional[float] = None, what: str = "request") -> float:
        self.check(what)
        left = self.remaining()
        return min(per_call, left) if per_call else left
