"""Abstract domain collaborators used by the voice command handlers.

Implementations raise ServiceError when a call fails; handlers turn that
into a spoken error outcome.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from voicedesk.voice.models import FinancialRecord, Task


class TaskService(ABC):
    """Task CRUD."""

    @abstractmethod
    async def create_task(
        self,
        title: str,
        description: str = "",
        priority: str = "medium",
        due_date: date | None = None,
        voice_transcription: str | None = None,
    ) -> Task:
        """Create a task. ``voice_transcription`` marks it as voice-created."""

    @abstractmethod
    async def list_tasks(self) -> list[Task]:
        """List the user's tasks in service order."""

    @abstractmethod
    async def update_task(self, task_id: str, patch: dict[str, Any]) -> Task:
        """Apply a partial update to a task."""


class FinanceService(ABC):
    """Income and expense records."""

    @abstractmethod
    async def create_record(
        self,
        type: str,
        amount: float,
        description: str,
        category: str = "general",
    ) -> FinancialRecord:
        """Record an income or expense."""


class AIService(ABC):
    """AI chat and jokes."""

    @abstractmethod
    async def chat(self, message: str) -> str:
        """Send a message and return the reply content."""

    @abstractmethod
    async def get_joke(self) -> str:
        """Return a joke."""


class Navigator(ABC):
    """Host router."""

    @abstractmethod
    def navigate(self, path: str) -> None:
        """Change the current page to ``path``."""
