"""Task repository implementation.

Provides the task-specific queries on top of the generic repository.
"""

from sqlalchemy import case, func
from sqlmodel import select

from ..schemas.database import Task
from .base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Repository for task persistence.

    Ordering by primary key is creation order because ids only grow.
    """

    def get_entity_class(self) -> type[Task]:
        """Return the database entity class for this repository."""
        return Task

    def set_completed(self, task_id: int, completed: bool) -> Task | None:
        """Set the completion flag, returning None if the task doesn't exist."""
        task = self.get_by_id(task_id)
        if task is not None:
            task.completed = completed
            self.session.add(task)
            self.session.flush()
        return task

    def completion_counts(self) -> tuple[int, int]:
        """Return ``(total, completed)`` from a single query."""
        statement = select(
            func.count(Task.id),
            func.coalesce(func.sum(case((Task.completed == True, 1), else_=0)), 0),  # noqa: E712
        )
        total, completed = self.session.exec(statement).one()
        return int(total), int(completed)
