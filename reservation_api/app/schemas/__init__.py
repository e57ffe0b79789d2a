"""
Pydantic schemas for persisted records, request bodies and read-side
views.  Field names are snake_case in Python and camelCase on the wire,
matching the layout of the stored JSON blobs.
"""
