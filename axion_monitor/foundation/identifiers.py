"""ID generation for monitoring sessions."""

from __future__ import annotations

from uuid import uuid4, UUID


def new_id() -> UUID:
    """Generate a new random UUID v4 for a monitoring session."""
    return uuid4()
