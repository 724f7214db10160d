"""Entity extraction from voice command transcripts.

Extracts structured values (amounts, due dates, priorities, titles,
destinations) from the raw transcript so digits and original casing are
preserved. Extractors never raise; a missing value is None and the
dispatcher decides whether to ask for it.
"""

from __future__ import annotations

import re

from voicedesk.voice.models import EntityBag, IntentKind

# Destinations: (pattern, path, spoken label). First matching row wins.
ROUTE_TABLE: list[tuple[str, str, str]] = [
    (r"\b(?:dashboard|home)\b", "/dashboard", "dashboard"),
    (r"\btasks?\b", "/tasks", "tasks"),
    (r"\b(?:finances?|financial|money)\b", "/finances", "finances"),
    (r"\b(?:voice|commands?)\b", "/voice", "voice commands"),
    (r"\b(?:ai|chat|assistant)\b", "/ai", "AI assistant"),
    (r"\banalytics\b", "/analytics", "analytics"),
    (r"\bsettings\b", "/settings", "settings"),
]

# Most explicit form first; non-positive values are skipped
AMOUNT_PATTERNS = [
    r"\$\s?(\d+(?:\.\d{2})?)",
    r"(\d+(?:\.\d{2})?)\s*dollars?\b",
    r"(\d+(?:\.\d{2})?)",
]

# A trailing apostrophe or letter means a possessive such as "today's", not a date
DUE_DATE_PATTERNS: list[tuple[str, int]] = [
    (r"\btoday(?![\w'])", 0),
    (r"\btomorrow(?![\w'])", 1),
    (r"\bnext\s+week(?![\w'])", 7),
]

PRIORITY_PATTERNS: list[tuple[str, str]] = [
    (r"\bhigh\s+priority(?![\w'])|\burgent(?![\w'])", "high"),
    (r"\blow\s+priority(?![\w'])", "low"),
]

_CREATE_TASK_RE = re.compile(r"(?:create|new|add)\s+tasks?\b[:\s]*(.*)", re.IGNORECASE)
_COMPLETE_TASK_RE = re.compile(r"(?:complete|finish)\s+tasks?\b[:\s]*(.*)", re.IGNORECASE)
_DESCRIPTION_RE = re.compile(r"\b(?:for|on)\s+(.+)", re.IGNORECASE)

# Stripped out of task titles so "buy milk tomorrow" becomes "buy milk"
_TITLE_NOISE_RE = re.compile(
    r"\b(?:due\s+)?(?:today|tomorrow|next\s+week)(?![\w'])"
    r"|\b(?:with\s+)?(?:(?:high|low)\s+priority|urgent)(?![\w'])",
    re.IGNORECASE,
)

_TRIM_CHARS = " \t.,:;!?"


def extract_entities(intent: IntentKind, raw_text: str) -> EntityBag:
    """Extract the entities relevant to an intent.

    Runs only the extractors the intent needs and returns an EntityBag.
    """
    text_lower = raw_text.lower()

    if intent == IntentKind.NAVIGATE:
        return EntityBag(target_route=extract_route(text_lower))

    if intent == IntentKind.CREATE_TASK:
        return EntityBag(
            description=extract_task_title(raw_text),
            priority=extract_priority(text_lower),
            due_date_offset_days=extract_due_date_offset(text_lower),
        )

    if intent == IntentKind.COMPLETE_TASK:
        return EntityBag(target_title=extract_target_title(raw_text))

    if intent in (IntentKind.ADD_EXPENSE, IntentKind.ADD_INCOME):
        return EntityBag(
            amount=extract_amount(raw_text),
            description=extract_description(raw_text),
        )

    return EntityBag()


def extract_amount(text: str) -> float | None:
    """Extract a monetary amount.

    Handles: "$25", "25.50 dollars", "add expense 40 for fuel".
    """
    for pattern in AMOUNT_PATTERNS:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            amount = float(match.group(1))
            if amount > 0:
                return amount
    return None


def extract_description(text: str) -> str | None:
    """Extract the text after "for" or "on", e.g. "... 25.50 for lunch" -> "lunch"."""
    match = _DESCRIPTION_RE.search(text)
    if not match:
        return None
    return match.group(1).strip(_TRIM_CHARS)


def extract_task_title(text: str) -> str | None:
    """Extract a new task's title from after "create/new/add task".

    Due-date tokens and priority phrases are removed from the title; they
    are reported through their own entities instead.
    """
    match = _CREATE_TASK_RE.search(text)
    if not match:
        return None

    title = _TITLE_NOISE_RE.sub(" ", match.group(1))
    title = re.sub(r"\s+", " ", title)
    return title.strip(_TRIM_CHARS)


def extract_target_title(text: str) -> str | None:
    """Extract the title fragment after "complete/finish task"."""
    match = _COMPLETE_TASK_RE.search(text)
    if not match:
        return None
    title = re.sub(r"\s+", " ", match.group(1)).strip(_TRIM_CHARS)
    return title or None


def extract_priority(text: str) -> str | None:
    """Extract priority: "high priority"/"urgent" -> high, "low priority" -> low."""
    for pattern, priority in PRIORITY_PATTERNS:
        if re.search(pattern, text):
            return priority
    return None


def extract_due_date_offset(text: str) -> int | None:
    """Extract a due date as days from today."""
    for pattern, offset in DUE_DATE_PATTERNS:
        if re.search(pattern, text):
            return offset
    return None


def extract_route(text: str) -> str | None:
    """Return the path of the first route-table row matching the text."""
    for pattern, path, _label in ROUTE_TABLE:
        if re.search(pattern, text):
            return path
    return None


def route_label(path: str) -> str:
    """Spoken name for a route path."""
    for _pattern, route_path, label in ROUTE_TABLE:
        if route_path == path:
            return label
    return path.strip("/") or "home"
