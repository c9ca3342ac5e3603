# src/models/document.py
import uuid
from sqlalchemy import Column, String, DateTime, JSON, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from db.database import Base


def generate_document_id() -> str:
    return uuid.uuid4().hex


class Document(Base):
    """A schemaless record living in a named collection"""

    __tablename__ = "documents"

    id = Column(String(32), primary_key=True, default=generate_document_id)
    collection = Column(String(64), nullable=False)

    data = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)

    # Store bookkeeping; document timestamps live inside ``data``
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (Index("ix_documents_collection_id", "collection", "id"),)

    def to_dict(self) -> dict:
        return {"id": self.id, **(self.data or {})}

    def __repr__(self) -> str:
        return f"<Document {self.collection}/{self.id}>"
