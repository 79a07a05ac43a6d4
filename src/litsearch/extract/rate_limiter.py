"""Process-wide rate limiter for NCBI E-utilities requests."""

import logging
import threading
import time

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    FIFO rate limiter: grants are at least min_interval seconds apart.

    Callers take a ticket and are served strictly in ticket order, so
    concurrent acquire() calls never overtake each other. The sleep happens
    while holding the turn, which keeps grant timestamps monotonic.
    A caller interrupted while queued gives up its ticket, and the queue
    skips it when the turn reaches it.
    """

    def __init__(self, min_interval: float = 0.34):
        if min_interval <= 0:
            raise ValueError(f"min_interval must be positive, got {min_interval}")

        self.min_interval = min_interval
        self._condition = threading.Condition()
        self._next_ticket = 0
        self._now_serving = 0
        self._abandoned = set()
        self._last_grant = None

    def acquire(self) -> float:
        """Block until the next request may be issued. Returns the grant time."""
        with self._condition:
            ticket = self._next_ticket
            self._next_ticket += 1
            try:
                while ticket != self._now_serving:
                    self._condition.wait()
            except BaseException:
                if ticket == self._now_serving:
                    self._advance()
                else:
                    self._abandoned.add(ticket)
                raise

        try:
            if self._last_grant is not None:
                wait = self._last_grant + self.min_interval - time.monotonic()
                if wait > 0:
                    logger.debug(f"Rate limit: sleeping {wait:.3f}s")
                while wait > 0:
                    time.sleep(wait)
                    wait = self._last_grant + self.min_interval - time.monotonic()
            granted = time.monotonic()
            self._last_grant = granted
            return granted
        finally:
            with self._condition:
                self._advance()

    def _advance(self) -> None:
        # Caller holds self._condition
        self._now_serving += 1
        while self._now_serving in self._abandoned:
            self._abandoned.discard(self._now_serving)
            self._now_serving += 1
        self._condition.notify_all()

    def __repr__(self) -> str:
        return f"RateLimiter(min_interval={self.min_interval}s)"
