"""
Base classes for records kept in the document store.

Attributes are snake_case in Python and camelCase on the wire and on disk.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model serialized with camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Record(CamelModel):
    """Top-level stored document. ``id`` is assigned by the store."""
    id: str
