"""Database engine and session helpers.

This centralizes engine creation so both the app and tests can share the
same configuration. By default the key-value slots live in a SQLite file
under the project root in `data/sitewatch.db`.
"""

import os
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from sitewatch.config import get_settings

from .models import Base


def get_engine(database_url: Optional[str] = None) -> Engine:
    """Return a SQLAlchemy engine, creating data dir as needed."""
    url = database_url or get_settings().database_url
    if url.startswith("sqlite:///"):
        db_location = url.replace("sqlite:///", "")
        if db_location != ":memory:" and db_location:
            os.makedirs(os.path.dirname(os.path.abspath(db_location)), exist_ok=True)
    return create_engine(url, echo=False, future=True)


def make_session_factory(eng: Engine) -> sessionmaker:
    return sessionmaker(bind=eng, autoflush=False, autocommit=False)


def init_db(eng: Engine) -> None:
    """Create the slot table if it doesn't exist.

    No migrations: the schema is a single key/value table.
    """
    Base.metadata.create_all(eng)
