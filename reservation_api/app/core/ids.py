"""Identifier allocation for the stored collections."""

from typing import Iterable


def next_id(existing_ids: Iterable[int]) -> int:
    """Return the identifier for the next record of a collection.

    ``1`` for an empty collection, otherwise one more than the highest
    live identifier.  No counter is persisted, so deleting the record
    with the highest id lets that id be issued again.
    """
    return max(existing_ids, default=0) + 1
