"""API tests package.

Drives the real FastAPI app over httpx with a per-test SQLite database.
Covers request validation, status codes and RFC 7807 error bodies.
"""
