"""
API package.

Versioned routers live in subpackages (``v1``).  New versions can be
added next to it without touching the existing routes.
"""
