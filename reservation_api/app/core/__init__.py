"""Configuration, storage, result values and security primitives."""
