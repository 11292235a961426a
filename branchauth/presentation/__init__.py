"""Presentation layer - API endpoints and HTTP concerns.

FastAPI routers, dependencies and middleware. The presentation layer is
thin: it dispatches commands/queries to the application layer and
translates results to HTTP responses.
"""
