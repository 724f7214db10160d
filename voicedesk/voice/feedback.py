"""Spoken confirmations for action outcomes.

Pure mapping from an ActionOutcome to the sentence read back to the user.
The session controller picks the voice/locale when it speaks the text.
"""

from __future__ import annotations

from typing import Any, Callable

from voicedesk.voice.models import ActionOutcome, OutcomeKind

HELP_TEXT = ". ".join([
    "You can say",
    "Go to dashboard, tasks, finances, voice, AI, analytics, or settings",
    "Create task followed by the task name",
    "Complete task followed by the task name",
    "Add expense or income followed by the amount",
    "Tell me a joke",
    "Or ask me any question",
])


def format_amount(amount: Any) -> str:
    """25 -> "25", 25.5 -> "25.50"."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return str(amount)
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}"


def _navigated(payload: dict[str, Any]) -> str:
    return f"Opening {payload.get('destination') or payload.get('route', 'page')}"


def _task_created(payload: dict[str, Any]) -> str:
    title = payload.get("title", "")
    priority = payload.get("priority", "medium")
    return f'Task "{title}" created with {priority} priority'


def _task_completed(payload: dict[str, Any]) -> str:
    return f'Task "{payload.get("title", "")}" marked as completed'


def _record_added(label: str) -> Callable[[dict[str, Any]], str]:
    def render(payload: dict[str, Any]) -> str:
        text = f"{label} of {format_amount(payload.get('amount'))}"
        if payload.get("description"):
            text += f" for {payload['description']}"
        return f"{text} recorded"

    return render


_RENDERERS: dict[OutcomeKind, Callable[[dict[str, Any]], str]] = {
    OutcomeKind.NAVIGATED: _navigated,
    OutcomeKind.TASK_CREATED: _task_created,
    OutcomeKind.TASK_COMPLETED: _task_completed,
    OutcomeKind.EXPENSE_ADDED: _record_added("Expense"),
    OutcomeKind.INCOME_ADDED: _record_added("Income"),
    OutcomeKind.JOKE: lambda payload: str(payload.get("joke", "")),
    OutcomeKind.HELP: lambda payload: HELP_TEXT,
    OutcomeKind.CHAT_REPLY: lambda payload: str(payload.get("reply", "")),
    OutcomeKind.ERROR: lambda payload: str(payload.get("message", "")),
}


def to_spoken_text(outcome: ActionOutcome) -> str:
    """Return the sentence to speak for an outcome (error messages verbatim)."""
    return _RENDERERS[outcome.kind](outcome.payload or {})
