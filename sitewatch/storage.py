"""Persistence adapter for the record snapshot and UI preferences.

The snapshot is stored as one JSON document in a named key-value slot;
theme mode and primary color each get a slot of their own so they
survive a data reset. Persistence is best-effort: every failure is
logged and swallowed, the in-memory store stays authoritative.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from sitewatch.config import Settings, get_settings
from sitewatch.database.engine import get_engine, init_db, make_session_factory
from sitewatch.database.repository import delete_slot, get_slot, list_slot_keys, set_slot
from sitewatch.models.schemas import (
    PRIMARY_COLORS,
    THEME_MODES,
    PrimaryColor,
    Snapshot,
    ThemeMode,
)
from sitewatch.utils.logger import get_logger

logger = get_logger(__name__)

# Keys whose string values are turned back into datetimes on load.
DATE_FIELDS = ("createdAt", "timestamp", "lastSeen", "checkIn", "checkOut")


def revive_dates(obj: Dict[str, Any]) -> Dict[str, Any]:
    """json object_hook: parse ISO-8601 strings under the date-bearing keys."""
    for key in DATE_FIELDS:
        value = obj.get(key)
        if isinstance(value, str):
            obj[key] = datetime.fromisoformat(value)
    return obj


def serialize_snapshot(snapshot: Snapshot) -> str:
    return json.dumps(snapshot.model_dump(mode="json", by_alias=True))


def deserialize_snapshot(text: str) -> Snapshot:
    """Parse stored text back into a Snapshot.

    Raises ValueError (JSON, date or schema failure) on bad input.
    """
    data = json.loads(text, object_hook=revive_dates)
    return Snapshot.model_validate(data)


class SnapshotStorage:
    """Save, load and clear the snapshot slot plus the preference slots."""

    def __init__(self, engine: Optional[Engine] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.engine = engine or get_engine(self.settings.database_url)
        self._Session = make_session_factory(self.engine)
        self._initialized = False

    def _ensure_table(self) -> None:
        if not self._initialized:
            init_db(self.engine)
            self._initialized = True

    # -------- raw slot access --------

    def read_slot(self, key: str) -> Optional[str]:
        try:
            self._ensure_table()
            with self._Session() as session:
                return get_slot(session, key)
        except SQLAlchemyError as e:
            logger.error(f"Failed to read slot '{key}': {e}")
            return None

    def write_slot(self, key: str, value: str) -> bool:
        try:
            self._ensure_table()
            with self._Session() as session:
                set_slot(session, key, value)
            return True
        except SQLAlchemyError as e:
            logger.error(f"Failed to write slot '{key}': {e}")
            return False

    def remove_slot(self, key: str) -> bool:
        try:
            self._ensure_table()
            with self._Session() as session:
                delete_slot(session, key)
            return True
        except SQLAlchemyError as e:
            logger.error(f"Failed to clear slot '{key}': {e}")
            return False

    def slot_keys(self) -> List[str]:
        """Names of all occupied slots; empty when the store is unreachable."""
        try:
            self._ensure_table()
            with self._Session() as session:
                return list_slot_keys(session)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list slots: {e}")
            return []

    # -------- snapshot --------

    def save(self, snapshot: Snapshot) -> None:
        try:
            text = serialize_snapshot(snapshot)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize snapshot: {e}")
            return
        if self.write_slot(self.settings.storage_key, text):
            logger.debug(f"Saved snapshot ({len(text)} bytes)")

    def load(self) -> Optional[Snapshot]:
        """Return the stored snapshot, or None when absent or unreadable."""
        text = self.read_slot(self.settings.storage_key)
        if not text:
            return None
        try:
            return deserialize_snapshot(text)
        except ValueError as e:
            logger.error(f"Failed to load snapshot from storage: {e}")
            return None

    def clear(self) -> None:
        self.remove_slot(self.settings.storage_key)

    # -------- preferences --------

    def load_theme_mode(self) -> Optional[ThemeMode]:
        value = self.read_slot(self.settings.theme_key)
        if value is None:
            return None
        if value not in THEME_MODES:
            logger.warning(f"Ignoring stored theme mode {value!r}")
            return None
        return value

    def save_theme_mode(self, mode: ThemeMode) -> None:
        self.write_slot(self.settings.theme_key, mode)

    def load_primary_color(self) -> Optional[PrimaryColor]:
        value = self.read_slot(self.settings.color_key)
        if value is None:
            return None
        if value not in PRIMARY_COLORS:
            logger.warning(f"Ignoring stored primary color {value!r}")
            return None
        return value

    def save_primary_color(self, color: PrimaryColor) -> None:
        self.write_slot(self.settings.color_key, color)
