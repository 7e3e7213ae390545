"""
Collection document database model.

Holds one row per collection; ``payload`` is the whole collection as a
pretty-printed JSON array.
"""

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from dailyops.app.db.session import Base


class CollectionDocument(Base):
    """Durable snapshot of one named collection."""
    __tablename__ = "collection_documents"

    name = Column(String(100), primary_key=True)
    payload = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<CollectionDocument(name='{self.name}', size={len(self.payload or '')})>"
