"""Service layer coordinating business rules and persistence."""

from .task_store import TaskStore

__all__ = ["TaskStore"]
