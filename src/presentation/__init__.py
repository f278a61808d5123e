"""Presentation layer - HTTP endpoints.

This layer contains FastAPI routers. It is thin: it dispatches commands to
the application layer and translates results to HTTP responses.

Structure:
- routers/: OAuth callback and system endpoints

The presentation layer depends on the application layer but contains NO
business logic.
"""
