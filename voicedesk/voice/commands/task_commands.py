"""Task-related voice command handlers.

Connects voice intents to the task service. Each handler performs at most
one write and invalidates the task cache only after it succeeds.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from voicedesk.voice.errors import ServiceError
from voicedesk.voice.models import ActionOutcome, Command, ErrorKind, OutcomeKind, Task
from voicedesk.voice.services import ServiceContext
from voicedesk.voice.services.cache import TASKS_KEY

logger = logging.getLogger(__name__)


async def handle_create_task(command: Command, ctx: ServiceContext) -> ActionOutcome:
    """Create a new task from voice input."""
    entities = command.entities
    title = entities.description

    if not title:
        return ActionOutcome.error(
            ErrorKind.CLARIFICATION_NEEDED,
            "What task would you like to create?",
            missing="title",
        )

    priority = entities.priority or "medium"
    due_date = None
    if entities.due_date_offset_days is not None:
        due_date = ctx.today() + timedelta(days=entities.due_date_offset_days)

    try:
        task = await ctx.tasks.create_task(
            title=title,
            description=f"Created via voice: {command.raw_text}",
            priority=priority,
            due_date=due_date,
            voice_transcription=command.raw_text,
        )
    except ServiceError as e:
        logger.warning(f"Voice task creation failed: {e}")
        return ActionOutcome.error(
            ErrorKind.NETWORK_FAILURE,
            "Failed to create task. Please try again.",
        )

    ctx.cache.invalidate(TASKS_KEY)
    return ActionOutcome(
        kind=OutcomeKind.TASK_CREATED,
        payload={
            "task_id": task.id,
            "title": title,
            "priority": priority,
            "due_date": due_date.isoformat() if due_date else None,
        },
    )


def find_matching_task(tasks: list[Task], target_title: str) -> Task | None:
    """First task whose title contains ``target_title``, ignoring case.

    When several tasks match, list order decides.
    """
    needle = target_title.lower()
    for task in tasks:
        if needle in task.title.lower():
            return task
    return None


async def handle_complete_task(command: Command, ctx: ServiceContext) -> ActionOutcome:
    """Mark the first task matching the spoken title as completed."""
    target = command.entities.target_title
    if not target:
        return ActionOutcome.error(
            ErrorKind.CLARIFICATION_NEEDED,
            "Which task would you like to complete?",
            missing="title",
        )

    try:
        tasks = await ctx.tasks.list_tasks()
    except ServiceError as e:
        logger.warning(f"Could not list tasks: {e}")
        return ActionOutcome.error(
            ErrorKind.NETWORK_FAILURE,
            "There was an error completing the task. Please try again.",
        )

    task = find_matching_task(tasks, target)
    if task is None:
        return ActionOutcome.error(
            ErrorKind.NOT_FOUND,
            f'Could not find a task matching "{target}"',
        )

    try:
        await ctx.tasks.update_task(task.id, {"status": "completed"})
    except ServiceError as e:
        logger.warning(f"Could not complete task {task.id}: {e}")
        return ActionOutcome.error(
            ErrorKind.NETWORK_FAILURE,
            "There was an error completing the task. Please try again.",
        )

    ctx.cache.invalidate(TASKS_KEY)
    return ActionOutcome(
        kind=OutcomeKind.TASK_COMPLETED,
        payload={"task_id": task.id, "title": task.title},
    )
