"""Deadline-bound, cancellable token shared by every git invocation of a run."""

import time
from typing import Callable, Optional


class OperationToken:
    """Carries one run's deadline and cancellation state.

    The token is created once at the top of the program and passed to every
    provider call. Once it is expired or cancelled, no further git command is
    started.

    Example:
        >>> token = OperationToken.with_timeout(5.0)
        >>> token.remaining() <= 5.0
        True
    """

    def __init__(
        self,
        deadline: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the token.

        Args:
            deadline: Absolute deadline on the ``clock`` timeline, or None for no deadline
            clock: Monotonic clock used to measure the remaining time
        """
        self._deadline = deadline
        self._clock = clock
        self._cancelled = False

    @classmethod
    def with_timeout(
        cls, seconds: float, clock: Callable[[], float] = time.monotonic
    ) -> "OperationToken":
        """Create a token expiring ``seconds`` from now."""
        return cls(deadline=clock() + seconds, clock=clock)

    def cancel(self) -> None:
        """Cancel the operation; later git calls fail immediately."""
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline (never negative), or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._clock())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def reason(self) -> Optional[str]:
        """Why the token can no longer be used, or None while it is still live."""
        if self._cancelled:
            return "operation cancelled"
        if self.expired:
            return "deadline exceeded"
        return None
