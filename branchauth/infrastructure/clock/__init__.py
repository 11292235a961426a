"""Clock adapters."""

from branchauth.infrastructure.clock.system_clock import SystemClock

__all__ = ["SystemClock"]
