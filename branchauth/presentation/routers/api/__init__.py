"""API routers and middleware."""
