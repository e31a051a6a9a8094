"""Thin repository helpers for key-value slots.

These functions provide a small abstraction over SQLAlchemy sessions so the
persistence adapter can read, overwrite and delete named slots.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from .models import KeyValueSlot


def get_slot(session: Session, key: str) -> Optional[str]:
    """Return the stored text for ``key``, or None if the slot is empty."""
    slot = session.get(KeyValueSlot, key)
    if slot is None:
        return None
    return slot.value


def set_slot(session: Session, key: str, value: str) -> KeyValueSlot:
    """Insert or overwrite a slot.

    Returns the persisted KeyValueSlot instance.
    """
    slot = session.get(KeyValueSlot, key)
    if slot is None:
        slot = KeyValueSlot(key=key, value=value)
        session.add(slot)
    else:
        slot.value = value

    session.commit()
    session.refresh(slot)
    return slot


def delete_slot(session: Session, key: str) -> None:
    """Delete a slot if it exists."""
    slot = session.get(KeyValueSlot, key)
    if slot is None:
        return
    session.delete(slot)
    session.commit()


def list_slot_keys(session: Session) -> List[str]:
    return [row.key for row in session.query(KeyValueSlot).order_by(KeyValueSlot.key).all()]
