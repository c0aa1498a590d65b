"""API routers for Tasky."""
