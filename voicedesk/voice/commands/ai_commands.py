"""Assistant voice command handlers: jokes, help, and free-form chat."""

from __future__ import annotations

import logging

from voicedesk.voice.errors import ServiceError
from voicedesk.voice.models import ActionOutcome, Command, ErrorKind, OutcomeKind
from voicedesk.voice.parser.intent_parser import AVAILABLE_COMMANDS
from voicedesk.voice.services import ServiceContext

logger = logging.getLogger(__name__)

NOT_UNDERSTOOD = 'I did not understand that command. Say "help" to hear available commands.'


async def handle_tell_joke(command: Command, ctx: ServiceContext) -> ActionOutcome:
    try:
        joke = await ctx.ai.get_joke()
    except ServiceError as e:
        logger.warning(f"Joke request failed: {e}")
        return ActionOutcome.error(
            ErrorKind.NETWORK_FAILURE,
            "Sorry, I could not get a joke right now.",
        )
    return ActionOutcome(kind=OutcomeKind.JOKE, payload={"joke": joke})


async def handle_help(command: Command, ctx: ServiceContext) -> ActionOutcome:
    """List command categories. No network call."""
    return ActionOutcome(kind=OutcomeKind.HELP, payload={"commands": AVAILABLE_COMMANDS})


async def handle_fallback_chat(command: Command, ctx: ServiceContext) -> ActionOutcome:
    """Forward the transcript verbatim to the AI chat."""
    if not command.raw_text:
        return ActionOutcome.error(ErrorKind.CLARIFICATION_NEEDED, NOT_UNDERSTOOD)

    try:
        reply = await ctx.ai.chat(command.raw_text)
    except ServiceError as e:
        logger.warning(f"AI chat failed: {e}")
        return ActionOutcome.error(ErrorKind.NETWORK_FAILURE, NOT_UNDERSTOOD)
    return ActionOutcome(kind=OutcomeKind.CHAT_REPLY, payload={"reply": reply})
