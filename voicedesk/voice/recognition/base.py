"""Abstract base class for speech recognition capabilities."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseRecognizer(ABC):
    """Microphone + speech-to-text capability.

    Results are delivered by the host to
    ``SessionController.handle_recognition_result``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g. 'web_speech', 'console')."""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether recognition is supported in this environment."""

    @abstractmethod
    async def start(self, language: str) -> None:
        """Acquire the microphone and begin recognition.

        Raises:
            PermissionDeniedError: microphone access was refused.
        """

    @abstractmethod
    async def stop(self) -> None:
        """Release the microphone. Safe to call when not started."""
