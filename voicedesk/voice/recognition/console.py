"""Console capabilities used by the CLI: typed input and printed speech."""

from __future__ import annotations

import logging
from typing import Callable

from voicedesk.voice.recognition.base import BaseRecognizer
from voicedesk.voice.recognition.speech import BaseSpeaker, SpeechHandle

logger = logging.getLogger(__name__)


class TypedRecognizer(BaseRecognizer):
    """Stands in for a microphone; the CLI feeds typed lines as final results."""

    def __init__(self):
        self.active = False

    @property
    def name(self) -> str:
        return "console"

    @property
    def is_available(self) -> bool:
        return True

    async def start(self, language: str) -> None:
        self.active = True
        logger.debug("Console recognizer started (%s)", language)

    async def stop(self) -> None:
        self.active = False


class PrintSpeaker(BaseSpeaker):
    """Writes utterances through ``output`` instead of playing audio."""

    def __init__(self, output: Callable[[str], None] = print):
        self._output = output

    def speak(self, text: str, language: str) -> SpeechHandle:
        self._output(f"[{language}] {text}")
        return SpeechHandle()
