"""Generic repository over a single SQLModel table.

Repositories work inside a session they are handed and only flush, so that
generated ids are visible; committing is the caller's job.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from sqlmodel import Session, select


EntityT = TypeVar("EntityT")


class BaseRepository(Generic[EntityT], ABC):
    """Lookup, insert and delete by integer primary key."""

    def __init__(self, session: Session):
        self.session = session

    @abstractmethod
    def get_entity_class(self) -> type[EntityT]:
        """Return the SQLModel entity class."""

    def add(self, entity: EntityT) -> EntityT:
        """Insert a new row and return it with its id assigned."""
        self.session.add(entity)
        self.session.flush()
        return entity

    def get_by_id(self, entity_id: int) -> EntityT | None:
        return self.session.get(self.get_entity_class(), entity_id)

    def delete(self, entity_id: int) -> bool:
        """Delete a row, returning False if there was nothing to delete."""
        entity = self.get_by_id(entity_id)
        if entity is None:
            return False
        self.session.delete(entity)
        self.session.flush()
        return True

    def list_all(self) -> list[EntityT]:
        """All rows in primary key order."""
        entity_class = self.get_entity_class()
        statement = select(entity_class).order_by(entity_class.id)
        return list(self.session.exec(statement).all())
