"""Repository pattern implementations for clean data access.

This module provides the repository layer that bridges the task store
with database persistence.
"""

from .base import BaseRepository
from .task_repository import TaskRepository


__all__ = ["BaseRepository", "TaskRepository"]
