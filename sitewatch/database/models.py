from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class KeyValueSlot(Base):
    """One named slot of the local durable key-value store.

    The whole record snapshot lives in a single slot as JSON text; each UI
    preference has a slot of its own.
    """

    __tablename__ = "kv_slots"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    def __repr__(self) -> str:  # pragma: no cover - repr utility
        return f"KeyValueSlot(key={self.key}, size={len(self.value or '')})"
