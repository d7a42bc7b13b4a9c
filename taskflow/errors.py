"""Error taxonomy shared by the task store, the HTTP layer and the client."""

from collections.abc import Mapping, Sequence
from typing import Any


class TaskflowError(Exception):
    """Base class for all TaskFlow errors."""


class ValidationError(TaskflowError):
    """A required field is missing, empty or out of bounds."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    @classmethod
    def from_error_list(cls, errors: Sequence[Mapping[str, Any]]) -> "ValidationError":
        """Build from Pydantic-style error dicts (``loc``, ``msg``, ``type``).

        The leading ``body`` location added by FastAPI is dropped.
        """
        details = []
        for error in errors:
            loc = [str(part) for part in error.get("loc", ()) if part != "body"]
            details.append(
                {
                    "field": ".".join(loc) or None,
                    "message": error.get("msg", "Invalid value"),
                    "type": error.get("type", "value_error"),
                }
            )

        parts = [
            f"{d['field']}: {d['message']}" if d["field"] else d["message"]
            for d in details
        ]
        return cls("; ".join(parts) or "Invalid request", errors=details)


class NotFoundError(TaskflowError):
    """No task exists with the requested id."""

    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class TransportError(TaskflowError):
    """The task API could not be reached or answered unexpectedly.

    Raised by the client only. Callers decide whether to retry.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


__all__ = ["NotFoundError", "TaskflowError", "TransportError", "ValidationError"]
