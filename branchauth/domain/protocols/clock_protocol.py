"""Clock protocol.

Every time-dependent decision (token expiry, blacklist freshness, lockout
timestamps) reads the current instant from an injected clock, once per
operation, so tests can control time.
"""

from datetime import datetime
from typing import Protocol


class ClockProtocol(Protocol):
    """Source of the current instant.

    Implementations:
        - SystemClock: timezone-aware UTC wall clock
    """

    def now(self) -> datetime:
        """Return the current instant (timezone-aware, UTC)."""
        ...
