"""System clock adapter."""

from datetime import UTC, datetime


class SystemClock:
    """Wall clock returning timezone-aware UTC instants.

    Implements ClockProtocol structurally.
    """

    def now(self) -> datetime:
        return datetime.now(UTC)
