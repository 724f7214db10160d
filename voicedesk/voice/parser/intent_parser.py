"""Intent classification for voice commands.

Uses an ordered table of phrase patterns, evaluated against the normalized
transcript. The first match wins, so a loose command such as
"create task to add expense" resolves to CREATE_TASK rather than
ADD_EXPENSE. Anything unmatched is forwarded to the AI chat.
"""

from __future__ import annotations

import re

from voicedesk.voice.models import Command, IntentKind
from voicedesk.voice.parser.entity_extractor import extract_entities
from voicedesk.voice.parser.normalizer import normalize

# Intent patterns: (pattern, intent, priority)
# Higher priority = matched first. Patterns run on normalized text.
INTENT_PATTERNS: list[tuple[str, IntentKind, int]] = [
    # Navigation short-circuits everything else
    (r"go to|navigate|open", IntentKind.NAVIGATE, 100),

    # Tasks
    (r"(?:create|new|add) task", IntentKind.CREATE_TASK, 90),
    (r"(?:complete|finish) task", IntentKind.COMPLETE_TASK, 80),

    # Finances
    (r"(?:add|record) expense", IntentKind.ADD_EXPENSE, 70),
    (r"(?:add|record) income", IntentKind.ADD_INCOME, 60),

    # AI
    (r"joke", IntentKind.TELL_JOKE, 50),

    # Help
    (r"help|commands|what can i say", IntentKind.HELP, 40),
]

# Compiled pattern cache
_compiled_patterns: list[tuple[re.Pattern, IntentKind, int]] | None = None


def _get_patterns() -> list[tuple[re.Pattern, IntentKind, int]]:
    """Get compiled patterns sorted by priority (highest first)."""
    global _compiled_patterns
    if _compiled_patterns is None:
        _compiled_patterns = sorted(
            [(re.compile(p), intent, pri) for p, intent, pri in INTENT_PATTERNS],
            key=lambda x: x[2],
            reverse=True,
        )
    return _compiled_patterns


def classify(normalized_text: str) -> IntentKind:
    """Return the intent of the first matching rule, or FALLBACK_CHAT."""
    if not normalized_text:
        return IntentKind.FALLBACK_CHAT

    for pattern, intent, _priority in _get_patterns():
        if pattern.search(normalized_text):
            return intent

    return IntentKind.FALLBACK_CHAT


def parse_command(raw_text: str, confidence: float = 0.0) -> Command:
    """Parse a transcript into an immutable Command.

    This is the main entry point for the voice command pipeline. The
    normalized text picks the intent; the raw text feeds extraction.
    """
    normalized = normalize(raw_text)
    intent = classify(normalized)
    entities = extract_entities(intent, raw_text)

    return Command(
        raw_text=raw_text.strip(),
        normalized_text=normalized,
        intent=intent,
        entities=entities,
        confidence=confidence,
    )


# Available commands for the help response
AVAILABLE_COMMANDS: dict[str, list[dict[str, str]]] = {
    "Navigation": [
        {"command": "Go to [page]", "example": "Go to dashboard"},
        {"command": "Open [page]", "example": "Open finances"},
    ],
    "Tasks": [
        {"command": "Create task [title]", "example": "Create task buy groceries tomorrow"},
        {"command": "Complete task [title]", "example": "Complete task buy groceries"},
    ],
    "Finances": [
        {"command": "Add expense [amount] for [description]", "example": "Add expense 25.50 for lunch"},
        {"command": "Add income [amount] for [description]", "example": "Add income 1200 for salary"},
    ],
    "Assistant": [
        {"command": "Tell me a joke", "example": "Tell me a joke"},
        {"command": "Help", "example": "What can I say?"},
        {"command": "Anything else", "example": "How can I save more money?"},
    ],
}
