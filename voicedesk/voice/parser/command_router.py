"""Dispatch parsed voice commands to their handlers.

The router maps each IntentKind to one async handler, runs it, and fills
in the spoken confirmation. Handler failures become ERROR outcomes so the
session always gets exactly one outcome per command.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from typing import Awaitable, Callable

from voicedesk.voice.feedback import to_spoken_text
from voicedesk.voice.models import ActionOutcome, Command, ErrorKind, IntentKind
from voicedesk.voice.services import ServiceContext

logger = logging.getLogger(__name__)

# Handler type: async function(command, services) -> ActionOutcome
HandlerFn = Callable[[Command, ServiceContext], Awaitable[ActionOutcome]]


class CommandRouter:
    """Routes commands to registered handlers."""

    def __init__(self, services: ServiceContext):
        self.services = services
        self._handlers: dict[IntentKind, HandlerFn] = {}

    def register(self, intent: IntentKind, handler: HandlerFn) -> None:
        """Register a handler for an intent type."""
        self._handlers[intent] = handler

    async def dispatch(self, command: Command) -> ActionOutcome:
        """Execute a command and return its outcome with spoken text set."""
        start = time.monotonic()

        handler = self._handlers.get(command.intent)
        if not handler:
            outcome = ActionOutcome.error(
                ErrorKind.INTERNAL,
                f"No handler for {command.intent.value}.",
            )
        else:
            try:
                outcome = await handler(command, self.services)
            except Exception as e:
                logger.exception(f"Voice command handler failed: {e}")
                outcome = ActionOutcome.error(
                    ErrorKind.INTERNAL,
                    "Sorry, I had trouble processing that command.",
                )

        if not outcome.spoken_text:
            outcome = dataclasses.replace(outcome, spoken_text=to_spoken_text(outcome))

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "Dispatched %s -> %s in %dms",
            command.intent.value,
            outcome.kind.value,
            elapsed_ms,
        )
        return outcome


def create_default_router(services: ServiceContext) -> CommandRouter:
    """Create a router with all default handlers registered."""
    from voicedesk.voice.commands.ai_commands import (
        handle_fallback_chat,
        handle_help,
        handle_tell_joke,
    )
    from voicedesk.voice.commands.finance_commands import (
        handle_add_expense,
        handle_add_income,
    )
    from voicedesk.voice.commands.navigation_commands import handle_navigate
    from voicedesk.voice.commands.task_commands import (
        handle_complete_task,
        handle_create_task,
    )

    router = CommandRouter(services)

    router.register(IntentKind.NAVIGATE, handle_navigate)

    # Task commands
    router.register(IntentKind.CREATE_TASK, handle_create_task)
    router.register(IntentKind.COMPLETE_TASK, handle_complete_task)

    # Finance commands
    router.register(IntentKind.ADD_EXPENSE, handle_add_expense)
    router.register(IntentKind.ADD_INCOME, handle_add_income)

    # Assistant commands
    router.register(IntentKind.TELL_JOKE, handle_tell_joke)
    router.register(IntentKind.HELP, handle_help)
    router.register(IntentKind.FALLBACK_CHAT, handle_fallback_chat)

    return router
