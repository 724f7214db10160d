"""Voice command parsing: normalization, intent classification, entity extraction, routing."""

from voicedesk.voice.parser.command_router import CommandRouter, create_default_router
from voicedesk.voice.parser.entity_extractor import extract_entities
from voicedesk.voice.parser.intent_parser import classify, parse_command
from voicedesk.voice.parser.normalizer import normalize

__all__ = [
    "CommandRouter",
    "classify",
    "create_default_router",
    "extract_entities",
    "normalize",
    "parse_command",
]
