"""Navigation voice command handler."""

from __future__ import annotations

import logging

from voicedesk.voice.models import ActionOutcome, Command, ErrorKind, OutcomeKind
from voicedesk.voice.parser.entity_extractor import route_label
from voicedesk.voice.services import ServiceContext

logger = logging.getLogger(__name__)


async def handle_navigate(command: Command, ctx: ServiceContext) -> ActionOutcome:
    """Change page. Nothing happens when no destination was recognized."""
    route = command.entities.target_route
    if not route:
        return ActionOutcome.error(
            ErrorKind.UNRECOGNIZED_DESTINATION,
            "Sorry, I didn't understand where to go. Try: go to tasks.",
        )

    ctx.navigator.navigate(route)
    return ActionOutcome(
        kind=OutcomeKind.NAVIGATED,
        payload={"route": route, "destination": route_label(route)},
    )
