"""Task endpoints.

Each handler translates one request into one task store call; errors raised
by the store are mapped to HTTP statuses by the handlers in ``app``.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from ..schemas.unified_models import TaskCreate, TaskRead, TaskUpdate
from ..services import TaskStore

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_store(request: Request) -> TaskStore:
    """Return the task store attached to the application."""
    return request.app.state.store


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(body: TaskCreate, store: TaskStore = Depends(get_store)) -> TaskRead:
    """Create a task."""
    return store.create(body.title, body.description)


@router.get("", response_model=list[TaskRead])
def list_tasks(store: TaskStore = Depends(get_store)) -> list[TaskRead]:
    """List all tasks in creation order, unfiltered."""
    return store.list()


@router.patch("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int, body: TaskUpdate, store: TaskStore = Depends(get_store)
) -> TaskRead:
    """Set the completion flag of a task."""
    return store.update(task_id, body)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_task(task_id: int, store: TaskStore = Depends(get_store)) -> Response:
    """Delete a task."""
    store.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
