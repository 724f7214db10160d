"""Exceptions raised by voice capabilities and domain collaborators.

Command-level failures never escape the dispatcher; they become ERROR
outcomes. The startup errors below stop the session from listening.
"""

from __future__ import annotations


class VoiceError(Exception):
    """Base class for voice pipeline errors."""


class ServiceError(VoiceError):
    """A domain-service call failed (transport, timeout, HTTP status, bad body)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RecognitionUnsupportedError(VoiceError):
    """Speech recognition is not available in this environment."""


class PermissionDeniedError(VoiceError):
    """Microphone access was denied."""


__all__ = [
    "PermissionDeniedError",
    "RecognitionUnsupportedError",
    "ServiceError",
    "VoiceError",
]
