"""
Top‑level package for the Reservation Store API.

The package itself exports nothing; the application, its services and
its storage layer live in the ``app`` subpackage and are imported with
fully qualified names such as ``reservation_api.app.main``.
"""

__all__ = []
