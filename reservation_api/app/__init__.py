"""
Application package initializer.

The project is split by concern: ``core`` holds configuration, logging,
the key-value store and the role gate; ``schemas`` the pydantic
records; ``services`` the account, booking and join logic; and
``api/v1`` the HTTP routes that expose those services.
"""

from .main import app  # noqa: F401
