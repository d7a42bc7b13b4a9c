"""Task store: the authoritative holder of all tasks.

Coordinates the task repository, validates input and owns the transaction
boundary of every operation. Every call runs in its own session and is
committed before it returns, so ``list()`` always reflects the latest write.
"""

import logging
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.engine import Engine

from ..database import get_engine, get_session_context
from ..errors import NotFoundError, ValidationError
from ..repositories import TaskRepository
from ..schemas.database import Task
from ..schemas.unified_models import TaskCreate, TaskRead, TaskUpdate
from ..utils.task_filters import CompletionSummary

logger = logging.getLogger(__name__)

# SQLite INTEGER PRIMARY KEY range; ids outside it cannot name a stored task.
MAX_TASK_ID = 2**63 - 1


class TaskStore:
    """Single source of truth for tasks.

    Operations are serialized with a lock around the task collection.
    ``title``, ``description``, ``id`` and ``created_at`` never change after
    creation; ``update`` only touches ``completed``.
    """

    def __init__(self, engine: Engine | None = None):
        """Initialize the store.

        Args:
            engine: SQLAlchemy engine. If None, uses the engine built from
                global settings.

        """
        self.engine = engine or get_engine()
        self._lock = threading.Lock()

    @contextmanager
    def _repository(self) -> Iterator[TaskRepository]:
        with self._lock, get_session_context(self.engine) as session:
            yield TaskRepository(session)

    def create(self, title: str, description: str | None = None) -> TaskRead:
        """Create a task and return it with its assigned id and timestamp.

        Raises:
            ValidationError: If the title is empty after trimming, or a field
                exceeds its maximum length.

        """
        try:
            task_create = TaskCreate(title=title, description=description)
        except PydanticValidationError as e:
            logger.warning(f"Rejected task: {e.error_count()} validation error(s)")
            raise ValidationError.from_error_list(e.errors()) from e

        with self._repository() as repo:
            task = repo.add(Task.from_create_model(task_create)).to_read_model()

        logger.info(f"Created task {task.id}: {task.title}")
        return task

    def list(self) -> list[TaskRead]:
        """Return all tasks in creation order."""
        with self._repository() as repo:
            return [task.to_read_model() for task in repo.list_all()]

    def get(self, task_id: int) -> TaskRead:
        """Return a single task.

        Raises:
            NotFoundError: If no task has this id.

        """
        self._check_id(task_id)
        with self._repository() as repo:
            task = repo.get_by_id(task_id)
            if task is None:
                raise NotFoundError(task_id)
            return task.to_read_model()

    def update(
        self, task_id: int, patch: TaskUpdate | Mapping[str, Any]
    ) -> TaskRead:
        """Apply a patch to a task and return the updated task.

        An empty patch returns the task unchanged.

        Raises:
            ValidationError: If the patch names a field other than
                ``completed`` or carries a non-boolean value.
            NotFoundError: If no task has this id.

        """
        if not isinstance(patch, TaskUpdate):
            try:
                patch = TaskUpdate.model_validate(dict(patch))
            except PydanticValidationError as e:
                raise ValidationError.from_error_list(e.errors()) from e

        self._check_id(task_id)
        with self._repository() as repo:
            if patch.has_changes():
                task = repo.set_completed(task_id, patch.completed)
            else:
                task = repo.get_by_id(task_id)

            if task is None:
                logger.warning(f"Update of unknown task {task_id}")
                raise NotFoundError(task_id)
            result = task.to_read_model()

        if patch.has_changes():
            logger.info(f"Task {task_id} completed={patch.completed}")
        return result

    def delete(self, task_id: int) -> None:
        """Permanently remove a task.

        Raises:
            NotFoundError: If no task has this id.

        """
        self._check_id(task_id)
        with self._repository() as repo:
            if not repo.delete(task_id):
                logger.warning(f"Delete of unknown task {task_id}")
                raise NotFoundError(task_id)

        logger.info(f"Deleted task {task_id}")

    def summary(self) -> CompletionSummary:
        """Completed and total task counts, read in one query."""
        with self._repository() as repo:
            total, completed = repo.completion_counts()
        return CompletionSummary(completed=completed, total=total)

    @staticmethod
    def _check_id(task_id: int) -> None:
        if not 0 < task_id <= MAX_TASK_ID:
            logger.warning(f"Task id out of range: {task_id}")
            raise NotFoundError(task_id)
