"""Identifier generation for stored records."""

import uuid


def new_id() -> str:
    """Return a fresh URL-safe record identifier (32 hex characters)."""
    return uuid.uuid4().hex
