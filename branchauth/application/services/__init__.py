"""Application services shared by command handlers."""

from branchauth.application.services.login_attempt_tracker import LoginAttemptTracker
from branchauth.application.services.token_issuer import TokenIssuer

__all__ = ["LoginAttemptTracker", "TokenIssuer"]
