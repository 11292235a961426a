"""Domain layer - Pure authentication and session rules.

Entities, value objects, error values and protocols (ports). The domain
layer has NO dependencies on any framework or infrastructure.

Structure:
- entities/: Credential, RefreshToken, BlacklistEntry, LoginAuditRecord
- value_objects/: AccessTokenClaims
- errors/: Authentication error values
- protocols/: Store, repository and service interfaces
"""
