"""Application layer - Use cases and orchestration.

Follows the CQRS pattern:
- commands/: Login, refresh, logout and revocation (write operations)
- queries/: Active session listing and counting (read operations)
- services/: TokenIssuer and LoginAttemptTracker shared by the handlers

The application layer orchestrates domain logic and depends only on domain
protocols; adapters are injected.
"""
