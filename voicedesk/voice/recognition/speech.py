"""Abstract text-to-speech capability and cancellable playback handles."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable


class SpeechHandle:
    """A playing utterance. ``wait()`` returns once it finishes or is cancelled."""

    def __init__(self, playback: Awaitable[None] | None = None):
        self._task: asyncio.Future | None = (
            asyncio.ensure_future(playback) if playback is not None else None
        )
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._task is None or self._task.done()

    def cancel(self) -> None:
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> None:
        if self._task is None:
            return
        try:
            await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise


class BaseSpeaker(ABC):
    """Text-to-speech playback."""

    @abstractmethod
    def speak(self, text: str, language: str) -> SpeechHandle:
        """Start speaking ``text`` in locale ``language``."""
