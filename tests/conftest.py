"""Shared test fixtures for VoiceDesk tests.

This module provides common fixtures used across all test modules:
- Mocked domain services wired into a ServiceContext
- Fake speech recognition and playback capabilities
- A fixed "today" so due dates are deterministic

Usage:
    async def test_something(services, router):
        outcome = await router.dispatch(parse_command("help"))
        ...
"""

from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from voicedesk.voice.errors import PermissionDeniedError
from voicedesk.voice.models import FinancialRecord, Task
from voicedesk.voice.parser.command_router import create_default_router
from voicedesk.voice.recognition.base import BaseRecognizer
from voicedesk.voice.recognition.speech import BaseSpeaker, SpeechHandle
from voicedesk.voice.services import QueryCache, ServiceContext
from voicedesk.voice.services.base import AIService, FinanceService, Navigator, TaskService


# ─────────────────────────────────────────────────────────────────────────────
# Path Constants
# ─────────────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).parent.parent
TODAY = date(2026, 10, 18)


# ─────────────────────────────────────────────────────────────────────────────
# Task Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_tasks() -> list[Task]:
    """Tasks as the task service would list them."""
    return [
        Task(id="1", title="Pay rent", status="pending", priority="high"),
        Task(id="2", title="Review budget for Q3", status="pending"),
        Task(id="3", title="Review budget for Q4", status="pending"),
    ]


# ─────────────────────────────────────────────────────────────────────────────
# Service Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def task_service(sample_tasks) -> AsyncMock:
    service = AsyncMock(spec=TaskService)

    async def create_task(title, description="", priority="medium", due_date=None,
                          voice_transcription=None):
        return Task(id="42", title=title, priority=priority, description=description,
                    due_date=due_date)

    async def update_task(task_id, patch):
        task = next(t for t in sample_tasks if t.id == task_id)
        return Task(id=task.id, title=task.title, status=patch.get("status", task.status))

    service.create_task.side_effect = create_task
    service.list_tasks.return_value = sample_tasks
    service.update_task.side_effect = update_task
    return service


@pytest.fixture
def finance_service() -> AsyncMock:
    service = AsyncMock(spec=FinanceService)

    async def create_record(type, amount, description, category="general"):
        return FinancialRecord(id="7", type=type, amount=amount,
                               description=description, category=category)

    service.create_record.side_effect = create_record
    return service


@pytest.fixture
def ai_service() -> AsyncMock:
    service = AsyncMock(spec=AIService)
    service.chat.return_value = "Try setting aside 10% of every paycheck."
    service.get_joke.return_value = "Why did the budget break up? It needed space."
    return service


@pytest.fixture
def navigator() -> MagicMock:
    return MagicMock(spec=Navigator)


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache()


@pytest.fixture
def services(task_service, finance_service, ai_service, navigator, cache) -> ServiceContext:
    return ServiceContext(
        tasks=task_service,
        finance=finance_service,
        ai=ai_service,
        navigator=navigator,
        cache=cache,
        today=lambda: TODAY,
    )


@pytest.fixture
def router(services):
    return create_default_router(services)


# ─────────────────────────────────────────────────────────────────────────────
# Capability Fakes
# ─────────────────────────────────────────────────────────────────────────────


class FakeRecognizer(BaseRecognizer):
    def __init__(self, available: bool = True, deny_permission: bool = False) -> None:
        self.available = available
        self.deny_permission = deny_permission
        self.start_calls: list[str] = []
        self.stop_calls = 0
        self.active = False

    @property
    def name(self) -> str:
        return "fake"

    @property
    def is_available(self) -> bool:
        return self.available

    async def start(self, language: str) -> None:
        self.start_calls.append(language)
        if self.deny_permission:
            raise PermissionDeniedError("microphone denied")
        self.active = True

    async def stop(self) -> None:
        self.stop_calls += 1
        self.active = False


class FakeSpeaker(BaseSpeaker):
    """Records utterances. With ``hold=True`` playback lasts until released."""

    def __init__(self, hold: bool = False) -> None:
        self.hold = hold
        self.spoken: list[tuple[str, str]] = []
        self.handles: list[SpeechHandle] = []
        self._release = asyncio.Event()

    def release(self) -> None:
        self._release.set()

    def speak(self, text: str, language: str) -> SpeechHandle:
        self.spoken.append((text, language))
        handle = SpeechHandle(self._release.wait()) if self.hold else SpeechHandle()
        self.handles.append(handle)
        return handle

    @property
    def texts(self) -> list[str]:
        return [text for text, _ in self.spoken]


@pytest.fixture
def recognizer() -> FakeRecognizer:
    return FakeRecognizer()


@pytest.fixture
def speaker() -> FakeSpeaker:
    return FakeSpeaker()
