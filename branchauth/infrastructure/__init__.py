"""Infrastructure layer - Adapters implementing domain protocols.

Structure:
- clock/: System clock
- logging/: structlog console adapter
- security/: bcrypt password hashing, JWT codec, refresh token generation
- persistence/: SQLAlchemy models, database and repositories

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
