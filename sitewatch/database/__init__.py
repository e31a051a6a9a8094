"""Key-value slot store: engine, table and session helpers."""
from .engine import get_engine, init_db, make_session_factory
from .models import Base, KeyValueSlot
from .repository import delete_slot, get_slot, list_slot_keys, set_slot

__all__ = [
    "get_engine",
    "init_db",
    "make_session_factory",
    "Base",
    "KeyValueSlot",
    "delete_slot",
    "get_slot",
    "list_slot_keys",
    "set_slot",
]
