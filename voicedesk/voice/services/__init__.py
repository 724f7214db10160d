"""Domain collaborators: task, financial, AI services, router, and query cache."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from voicedesk.voice.services.base import AIService, FinanceService, Navigator, TaskService
from voicedesk.voice.services.cache import QueryCache


@dataclass
class ServiceContext:
    """Everything a command handler may touch."""

    tasks: TaskService
    finance: FinanceService
    ai: AIService
    navigator: Navigator
    cache: QueryCache = field(default_factory=QueryCache)
    today: Callable[[], date] = date.today


__all__ = [
    "AIService",
    "FinanceService",
    "Navigator",
    "QueryCache",
    "ServiceContext",
    "TaskService",
]
