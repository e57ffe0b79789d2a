"""
Service layer.

Each service owns the business rules of one collection and talks to
storage only through the ``KeyValueStore`` it is constructed with, so
the same code runs against the SQLite file in production and an
in-memory store in tests.
"""
