"""Consumer-side task filtering and summaries.

The API always returns the full list; narrowing it to pending or completed
tasks is done by whoever displays it.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from ..schemas.unified_models import TaskRead


class TaskFilter(StrEnum):
    """View filters offered to the user."""

    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"


def filter_tasks(
    tasks: Iterable[TaskRead], task_filter: TaskFilter = TaskFilter.ALL
) -> list[TaskRead]:
    """Return the tasks matching the filter, preserving order."""
    if task_filter == TaskFilter.PENDING:
        return [task for task in tasks if not task.completed]
    if task_filter == TaskFilter.COMPLETED:
        return [task for task in tasks if task.completed]
    return list(tasks)


@dataclass(frozen=True)
class CompletionSummary:
    """Completed/total counts for a task list."""

    completed: int
    total: int

    @property
    def pending(self) -> int:
        return self.total - self.completed

    @property
    def percentage(self) -> float:
        return round(self.completed / self.total * 100, 1) if self.total else 0.0

    def __str__(self) -> str:
        return f"{self.completed} of {self.total} completed"


def summarize(tasks: Iterable[TaskRead]) -> CompletionSummary:
    """Count completed tasks against the total."""
    tasks = list(tasks)
    return CompletionSummary(
        completed=sum(1 for task in tasks if task.completed), total=len(tasks)
    )
