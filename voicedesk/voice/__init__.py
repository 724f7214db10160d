"""Voice Interface - Hands-free control of tasks and finances

Philosophy:
    Speaking a command should be as good as filling in the form. The
    pipeline is deterministic: the same transcript always yields the same
    intent, entities, and action.

Components:
    models.py: Data models (IntentKind, EntityBag, Command, ActionOutcome, SessionState)
    errors.py: Exceptions for capability and service failures
    config.py: pydantic settings loaded from args/voice.yaml
    parser/: Normalization, intent classification, entity extraction, dispatch
    commands/: Handlers for each intent (navigation, tasks, finance, assistant)
    feedback.py: Spoken confirmations for outcomes
    services/: Task, financial, and AI collaborators (HTTP and in-memory)
    recognition/: Speech recognition and playback interfaces
    session/: The listening/processing/speaking state machine

Usage:
    from voicedesk.voice.parser.intent_parser import parse_command
    from voicedesk.voice.parser.command_router import create_default_router

    command = parse_command("add expense 25.50 for lunch", confidence=0.9)
    router = create_default_router(services)
    outcome = await router.dispatch(command)
"""

from voicedesk.voice.errors import (
    PermissionDeniedError,
    RecognitionUnsupportedError,
    ServiceError,
    VoiceError,
)
from voicedesk.voice.feedback import to_spoken_text
from voicedesk.voice.models import (
    ActionOutcome,
    Command,
    EntityBag,
    ErrorKind,
    IntentKind,
    Language,
    OutcomeKind,
    Phase,
    RecognitionEvent,
    SessionState,
)
from voicedesk.voice.parser import create_default_router, parse_command
from voicedesk.voice.session import SessionController

__all__ = [
    "ActionOutcome",
    "Command",
    "EntityBag",
    "ErrorKind",
    "IntentKind",
    "Language",
    "OutcomeKind",
    "PermissionDeniedError",
    "Phase",
    "RecognitionEvent",
    "RecognitionUnsupportedError",
    "ServiceError",
    "SessionController",
    "SessionState",
    "VoiceError",
    "create_default_router",
    "parse_command",
    "to_spoken_text",
]
