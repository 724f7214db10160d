"""Voice session lifecycle."""

from voicedesk.voice.session.controller import SessionController

__all__ = ["SessionController"]
