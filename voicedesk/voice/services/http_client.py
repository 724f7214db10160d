"""
HTTP clients for the task, financial, and AI services.

All three share one httpx.AsyncClient pointed at the application API.
Every transport error, timeout, non-2xx status, or malformed body is
raised as ServiceError. Nothing is retried.

Usage:
    from voicedesk.voice.services.http_client import ApiClient

    async with ApiClient(base_url="http://localhost:5000") as api:
        tasks = await api.tasks.list_tasks()
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, TypeVar

import httpx

from voicedesk.voice.errors import ServiceError
from voicedesk.voice.models import FinancialRecord, Task
from voicedesk.voice.services.base import AIService, FinanceService, TaskService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApiClient:
    """Owns the shared httpx client and exposes the three services."""

    def __init__(
        self,
        base_url: str,
        timeout: float | None = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json", **(headers or {})},
            transport=transport,
        )
        self.tasks = HttpTaskService(self)
        self.finance = HttpFinanceService(self)
        self.ai = HttpAIService(self)

    async def request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the decoded JSON object."""
        try:
            response = await self._client.request(method, path, json=json)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"{method} {path} returned {status}")
            raise ServiceError(f"{method} {path} returned {status}", status_code=status) from e
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ServiceError(f"{method} {path} failed: {e}") from e
        except ValueError as e:
            raise ServiceError(f"{method} {path} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise ServiceError(f"{method} {path} returned unexpected body")
        return data

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def _field(data: dict[str, Any], key: str, path: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ServiceError(f"{path} response missing '{key}'") from None


def _parse(factory: Callable[[Any], T], payload: Any, path: str) -> T:
    """Build a DTO from a response payload; bad shapes become ServiceError."""
    try:
        return factory(payload)
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise ServiceError(f"{path} returned a malformed body: {e!r}") from e


def _task_list(items: Any) -> list[Task]:
    return [Task.from_dict(t) for t in items]


class HttpTaskService(TaskService):
    """/api/tasks"""

    def __init__(self, api: ApiClient):
        self._api = api

    async def create_task(
        self,
        title: str,
        description: str = "",
        priority: str = "medium",
        due_date: date | None = None,
        voice_transcription: str | None = None,
    ) -> Task:
        body: dict[str, Any] = {
            "title": title,
            "description": description,
            "priority": priority,
            "dueDate": due_date.isoformat() if due_date else None,
        }
        if voice_transcription is not None:
            body["createdViaVoice"] = True
            body["voiceTranscription"] = voice_transcription

        data = await self._api.request("POST", "/api/tasks", json=body)
        return _parse(Task.from_dict, _field(data, "task", "/api/tasks"), "/api/tasks")

    async def list_tasks(self) -> list[Task]:
        data = await self._api.request("GET", "/api/tasks")
        return _parse(_task_list, _field(data, "tasks", "/api/tasks"), "/api/tasks")

    async def update_task(self, task_id: str, patch: dict[str, Any]) -> Task:
        path = f"/api/tasks/{task_id}"
        data = await self._api.request("PATCH", path, json=patch)
        return _parse(Task.from_dict, _field(data, "task", path), path)


class HttpFinanceService(FinanceService):
    """/api/financial/records"""

    def __init__(self, api: ApiClient):
        self._api = api

    async def create_record(
        self,
        type: str,
        amount: float,
        description: str,
        category: str = "general",
    ) -> FinancialRecord:
        path = "/api/financial/records"
        data = await self._api.request(
            "POST",
            path,
            json={
                "type": type,
                "amount": amount,
                "description": description,
                "category": category,
            },
        )
        return _parse(FinancialRecord.from_dict, _field(data, "record", path), path)


class HttpAIService(AIService):
    """/api/ai"""

    def __init__(self, api: ApiClient):
        self._api = api

    async def chat(self, message: str) -> str:
        data = await self._api.request("POST", "/api/ai/chat", json={"message": message})
        return str(_field(data, "content", "/api/ai/chat"))

    async def get_joke(self) -> str:
        data = await self._api.request("GET", "/api/ai/daily-joke")
        return str(_field(data, "joke", "/api/ai/daily-joke"))
