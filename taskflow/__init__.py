"""TaskFlow - personal task tracking service.

Core Components:
- services: TaskStore, the authoritative holder of tasks
- api: FastAPI application exposing the task endpoints
- client: async httpx client for the task API
- utils: consumer-side filtering and completion summaries
"""

from .errors import NotFoundError, TaskflowError, TransportError, ValidationError
from .schemas import TaskCreate, TaskRead, TaskUpdate
from .services import TaskStore

__all__ = [
    "NotFoundError",
    "TaskCreate",
    "TaskRead",
    "TaskStore",
    "TaskUpdate",
    "TaskflowError",
    "TransportError",
    "ValidationError",
]

__version__ = "0.1.0"
