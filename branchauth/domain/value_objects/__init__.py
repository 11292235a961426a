"""Domain value objects.

Immutable value objects shared across layers.
"""

from branchauth.domain.value_objects.access_token_claims import AccessTokenClaims

__all__ = ["AccessTokenClaims"]
