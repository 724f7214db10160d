"""Income and expense voice command handlers."""

from __future__ import annotations

import logging

from voicedesk.voice.errors import ServiceError
from voicedesk.voice.models import ActionOutcome, Command, ErrorKind, OutcomeKind
from voicedesk.voice.services import ServiceContext
from voicedesk.voice.services.cache import FINANCIAL_RECORDS_KEY, FINANCIAL_SUMMARY_KEY

logger = logging.getLogger(__name__)

# record type -> (outcome kind, prompt when the amount is missing)
_RECORD_TYPES: dict[str, tuple[OutcomeKind, str]] = {
    "expense": (OutcomeKind.EXPENSE_ADDED, "How much was the expense?"),
    "income": (OutcomeKind.INCOME_ADDED, "How much income would you like to record?"),
}


async def _add_record(command: Command, ctx: ServiceContext, record_type: str) -> ActionOutcome:
    kind, prompt = _RECORD_TYPES[record_type]
    amount = command.entities.amount
    description = command.entities.description

    if amount is None:
        return ActionOutcome.error(ErrorKind.CLARIFICATION_NEEDED, prompt, missing="amount")

    try:
        record = await ctx.finance.create_record(
            type=record_type,
            amount=amount,
            description=description or f"Voice recorded {record_type}",
            category="general",
        )
    except ServiceError as e:
        logger.warning(f"Voice {record_type} failed: {e}")
        return ActionOutcome.error(
            ErrorKind.NETWORK_FAILURE,
            f"There was an error recording the {record_type}. Please try again.",
        )

    ctx.cache.invalidate(FINANCIAL_RECORDS_KEY, FINANCIAL_SUMMARY_KEY)
    return ActionOutcome(
        kind=kind,
        payload={"record_id": record.id, "amount": amount, "description": description},
    )


async def handle_add_expense(command: Command, ctx: ServiceContext) -> ActionOutcome:
    """Record an expense from voice input."""
    return await _add_record(command, ctx, "expense")


async def handle_add_income(command: Command, ctx: ServiceContext) -> ActionOutcome:
    """Record income from voice input."""
    return await _add_record(command, ctx, "income")
