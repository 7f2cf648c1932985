"""CRUD operations for database models."""

from sqlalchemy import create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from database.models import Base, SettingEntry
from plant_sim.config_store import PersistenceError


def get_value(session: Session, key: str) -> str | None:
    result = session.execute(select(SettingEntry).where(SettingEntry.key == key))
    entry = result.scalar_one_or_none()
    return entry.value if entry is not None else None


def put_value(session: Session, key: str, value: str):
    entry = session.get(SettingEntry, key)
    if entry is None:
        session.add(SettingEntry(key=key, value=value))
    else:
        entry.value = value
    session.commit()


class SqlAlchemyBackend:
    """Key-value backend for ``ConfigurationStore`` on a SQL database.

    Database errors surface as ``PersistenceError`` so the store can fall
    back to in-memory state.
    """

    def __init__(self, url: str = "sqlite:///./plant_sim.db", **engine_kwargs):
        self.engine = create_engine(url, **engine_kwargs)
        self._session = sessionmaker(bind=self.engine, expire_on_commit=False)
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Cannot initialise settings table: {e}") from e

    def get(self, key: str) -> str | None:
        try:
            with self._session() as session:
                return get_value(session, key)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Read of {key!r} failed: {e}") from e

    def put(self, key: str, value: str) -> None:
        try:
            with self._session() as session:
                put_value(session, key, value)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Write of {key!r} failed: {e}") from e

    def dispose(self):
        self.engine.dispose()
