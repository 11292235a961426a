"""Test suite for branchauth.

- unit/: handlers, services and adapters with mocked collaborators
- integration/: repositories and auth flows against SQLite (aiosqlite)
- api/: HTTP endpoints through the real app
"""
