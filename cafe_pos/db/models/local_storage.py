# cafe_pos/db/models/local_storage.py
from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.sql import func

from cafe_pos.db.base import Base


class LocalRecord(Base):
    __tablename__ = "local_storage"

    """One wholesale JSON document of the local fallback store.

    The store holds a handful of logical keys (product catalog, transaction
    ledger, application settings). Each value is the full serialized list or
    record and is always read and replaced as a whole, never patched.
    """

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)

    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
