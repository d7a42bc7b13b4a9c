"""Async client for the task API.

A thin ``httpx`` wrapper that turns API responses back into ``TaskRead``
models and failure statuses back into the TaskFlow error taxonomy. The
client never retries; transport failures surface as ``TransportError``.
"""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from .config import ClientSettings, get_settings
from .errors import NotFoundError, TransportError, ValidationError
from .schemas.unified_models import TaskRead

logger = logging.getLogger(__name__)

_task_list_adapter = TypeAdapter(list[TaskRead])


class TaskClient:
    """Client for the four task endpoints.

    Usage:
        async with TaskClient() as client:
            task = await client.create_task("Buy milk")
            await client.set_completed(task.id, True)
    """

    def __init__(
        self,
        config: ClientSettings | None = None,
        base_url: str | None = None,
        api_prefix: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client with centralized configuration.

        Args:
            config: ClientSettings instance. If None, uses global settings.
            base_url: Base URL override.
            api_prefix: Route prefix override. If None, uses the server
                settings prefix.
            timeout: Request timeout override in seconds.
            transport: Custom httpx transport (used for in-process testing).

        """
        settings = get_settings()
        self.config = config or settings.client

        self.base_url = (base_url or str(self.config.base_url)).rstrip("/")
        self.api_prefix = (
            settings.server.api_prefix if api_prefix is None else api_prefix
        )
        self.timeout = timeout or self.config.timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "TaskClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self, method: str, path: str, data: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Send a request and map failure statuses onto TaskFlow errors."""
        client = await self._get_client()
        url = f"{self.api_prefix}{path}"

        try:
            response = await client.request(method, url, json=data)
        except httpx.TimeoutException as e:
            raise TransportError(f"Task API request timed out: {method} {url}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Task API request failed: {e!s}") from e

        if response.is_success:
            return response

        detail = _error_detail(response)
        if response.status_code == httpx.codes.NOT_FOUND and path.count("/") > 1:
            task_id = int(path.rsplit("/", 1)[1])
            raise NotFoundError(task_id)
        if response.status_code == httpx.codes.BAD_REQUEST:
            errors = _error_body(response).get("errors", [])
            raise ValidationError(detail, errors=errors)

        logger.error(f"Task API error {response.status_code}: {detail}")
        raise TransportError(
            f"Task API error: {detail}", status_code=response.status_code
        )

    async def list_tasks(self) -> list[TaskRead]:
        """Fetch all tasks in creation order."""
        response = await self._request("GET", "/tasks")
        return _task_list_adapter.validate_json(response.content)

    async def create_task(
        self, title: str, description: str | None = None
    ) -> TaskRead:
        """Create a task."""
        payload: dict[str, Any] = {"title": title}
        if description is not None:
            payload["description"] = description
        response = await self._request("POST", "/tasks", payload)
        return TaskRead.model_validate_json(response.content)

    async def set_completed(self, task_id: int, completed: bool) -> TaskRead:
        """Set the completion flag of a task."""
        response = await self._request(
            "PATCH", f"/tasks/{task_id}", {"completed": completed}
        )
        return TaskRead.model_validate_json(response.content)

    async def delete_task(self, task_id: int) -> None:
        """Delete a task."""
        await self._request("DELETE", f"/tasks/{task_id}")


def _error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error_detail(response: httpx.Response) -> str:
    detail = _error_body(response).get("detail")
    if isinstance(detail, str):
        return detail
    return response.text or response.reason_phrase
