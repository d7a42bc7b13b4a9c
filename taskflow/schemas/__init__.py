"""Schema package for TaskFlow.

This package provides:
- Business models for request and response bodies
- The database entity model

Quick usage:
    from taskflow.schemas import TaskCreate, TaskRead, TaskUpdate
    from taskflow.repositories import TaskRepository
    from taskflow.services import TaskStore
"""

# Database entities
from .database import BaseEntityModel, Task

# Business models
from .unified_models import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    BaseBusinessModel,
    TaskCreate,
    TaskRead,
    TaskUpdate,
    UnifiedConfig,
    utc_now,
)

__all__ = [
    "DESCRIPTION_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
    "BaseBusinessModel",
    "BaseEntityModel",
    "Task",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "UnifiedConfig",
    "utc_now",
]
