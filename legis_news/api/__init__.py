"""API routers for the legislative news service."""
