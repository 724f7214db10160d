"""Voice interface data models.

Defines intents, entities, outcomes, and session state for the voice
command pipeline:
    RecognitionEvent → Command → ActionOutcome → spoken feedback
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any


class IntentKind(str, Enum):
    """Voice command intent types. Exactly one per Command."""

    NAVIGATE = "navigate"
    CREATE_TASK = "create_task"
    COMPLETE_TASK = "complete_task"
    ADD_EXPENSE = "add_expense"
    ADD_INCOME = "add_income"
    TELL_JOKE = "tell_joke"
    HELP = "help"
    FALLBACK_CHAT = "fallback_chat"


class OutcomeKind(str, Enum):
    """Kinds of action outcome produced by the dispatcher."""

    NAVIGATED = "navigated"
    TASK_CREATED = "task_created"
    TASK_COMPLETED = "task_completed"
    EXPENSE_ADDED = "expense_added"
    INCOME_ADDED = "income_added"
    JOKE = "joke"
    HELP = "help"
    CHAT_REPLY = "chat_reply"
    ERROR = "error"


class ErrorKind(str, Enum):
    """Why an action ended in an error outcome."""

    CLARIFICATION_NEEDED = "clarification_needed"
    NOT_FOUND = "not_found"
    NETWORK_FAILURE = "network_failure"
    UNRECOGNIZED_DESTINATION = "unrecognized_destination"
    INTERNAL = "internal"


class Phase(str, Enum):
    """Session controller phases."""

    IDLE = "idle"
    LISTENING = "listening"
    PROCESSING = "processing"
    SPEAKING = "speaking"


class Language(str, Enum):
    """Languages the session can speak feedback in."""

    ENGLISH = "en"
    ARABIC = "ar"


PRIORITIES = ("low", "medium", "high")


@dataclass(frozen=True)
class RecognitionEvent:
    """A result from the speech-to-text capability. Never persisted."""

    transcript: str
    confidence: float = 0.0
    is_final: bool = True
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class EntityBag:
    """Structured values extracted from a command. Missing values are None."""

    amount: float | None = None
    due_date_offset_days: int | None = None
    priority: str | None = None
    description: str | None = None
    target_route: str | None = None
    target_title: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": self.amount,
            "due_date_offset_days": self.due_date_offset_days,
            "priority": self.priority,
            "description": self.description,
            "target_route": self.target_route,
            "target_title": self.target_title,
        }


@dataclass(frozen=True)
class Command:
    """An accepted recognition result with its intent and entities."""

    raw_text: str
    normalized_text: str
    intent: IntentKind
    entities: EntityBag = field(default_factory=EntityBag)
    confidence: float = 0.0
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "raw_text": self.raw_text,
            "normalized_text": self.normalized_text,
            "confidence": self.confidence,
            "intent": self.intent.value,
            "entities": self.entities.to_dict(),
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class ActionOutcome:
    """Result of dispatching one Command.

    For ERROR outcomes the payload carries ``error`` (an ErrorKind value)
    and ``message`` (the sentence to speak).
    """

    kind: OutcomeKind
    payload: dict[str, Any] = field(default_factory=dict)
    spoken_text: str = ""

    @classmethod
    def error(cls, error: ErrorKind, message: str, **extra: Any) -> ActionOutcome:
        return cls(
            kind=OutcomeKind.ERROR,
            payload={"error": error.value, "message": message, **extra},
        )

    @property
    def is_error(self) -> bool:
        return self.kind == OutcomeKind.ERROR

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "payload": self.payload,
            "spoken_text": self.spoken_text,
        }


@dataclass(frozen=True)
class SessionState:
    """Process-wide session settings and phase.

    Only the session controller produces new values; consumers read it.
    """

    phase: Phase = Phase.IDLE
    language: Language = Language.ENGLISH
    continuous: bool = True
    confidence_threshold: float = 0.7

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase.value,
            "language": self.language.value,
            "continuous": self.continuous,
            "confidence_threshold": self.confidence_threshold,
        }


@dataclass
class Task:
    """A task as returned by the task service."""

    id: str
    title: str
    status: str = "pending"
    priority: str = "medium"
    description: str = ""
    due_date: date | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        due = data.get("dueDate") or data.get("due_date")
        if isinstance(due, str):
            due = date.fromisoformat(due[:10])
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            status=data.get("status", "pending"),
            priority=data.get("priority", "medium"),
            description=data.get("description") or "",
            due_date=due,
        )


@dataclass
class FinancialRecord:
    """An income or expense record as returned by the financial service."""

    id: str
    type: str
    amount: float
    description: str = ""
    category: str = "general"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FinancialRecord:
        return cls(
            id=str(data["id"]),
            type=data.get("type", "expense"),
            amount=float(data.get("amount", 0)),
            description=data.get("description") or "",
            category=data.get("category", "general"),
        )
