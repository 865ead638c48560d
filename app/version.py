"""
Application version information.

Version format: MAJOR.MINOR
- MAJOR: Breaking API changes (0 while the API is still settling)
- MINOR: Incremented with each merged PR

Version is displayed on server startup, in GET / and in the OpenAPI schema.
"""

__version__ = "0.1"
