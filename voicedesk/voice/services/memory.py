"""In-memory services for dry runs and local development.

Behave like the HTTP services without a backend: tasks and records live in
lists, the AI echoes.
"""

from __future__ import annotations

import itertools
import logging
from datetime import date
from typing import Any

from voicedesk.voice.errors import ServiceError
from voicedesk.voice.models import FinancialRecord, Task
from voicedesk.voice.services.base import AIService, FinanceService, Navigator, TaskService

logger = logging.getLogger(__name__)

JOKES = [
    "Why did the budget break up with the calendar? It needed more space.",
    "I told my to-do list a joke. It didn't get done.",
    "Why don't accountants get lost? They always follow the balance.",
]


class InMemoryTaskService(TaskService):
    def __init__(self, tasks: list[Task] | None = None):
        self.tasks: list[Task] = list(tasks or [])
        self._ids = itertools.count(len(self.tasks) + 1)

    async def create_task(
        self,
        title: str,
        description: str = "",
        priority: str = "medium",
        due_date: date | None = None,
        voice_transcription: str | None = None,
    ) -> Task:
        task = Task(
            id=str(next(self._ids)),
            title=title,
            priority=priority,
            description=description,
            due_date=due_date,
        )
        self.tasks.append(task)
        return task

    async def list_tasks(self) -> list[Task]:
        return list(self.tasks)

    async def update_task(self, task_id: str, patch: dict[str, Any]) -> Task:
        for task in self.tasks:
            if task.id == task_id:
                for key, value in patch.items():
                    setattr(task, key, value)
                return task
        raise ServiceError(f"Task {task_id} not found", status_code=404)


class InMemoryFinanceService(FinanceService):
    def __init__(self):
        self.records: list[FinancialRecord] = []

    async def create_record(
        self,
        type: str,
        amount: float,
        description: str,
        category: str = "general",
    ) -> FinancialRecord:
        record = FinancialRecord(
            id=str(len(self.records) + 1),
            type=type,
            amount=amount,
            description=description,
            category=category,
        )
        self.records.append(record)
        return record


class EchoAIService(AIService):
    def __init__(self):
        self._jokes = itertools.cycle(JOKES)

    async def chat(self, message: str) -> str:
        return f"You said: {message}"

    async def get_joke(self) -> str:
        return next(self._jokes)


class RecordingNavigator(Navigator):
    """Keeps every visited path; ``current`` is the last one."""

    def __init__(self):
        self.visited: list[str] = []

    @property
    def current(self) -> str | None:
        return self.visited[-1] if self.visited else None

    def navigate(self, path: str) -> None:
        logger.info(f"Navigating to {path}")
        self.visited.append(path)
