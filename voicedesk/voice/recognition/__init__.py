"""Speech capabilities: recognition (STT) and playback (TTS) interfaces."""

from voicedesk.voice.recognition.base import BaseRecognizer
from voicedesk.voice.recognition.speech import BaseSpeaker, SpeechHandle

__all__ = [
    "BaseRecognizer",
    "BaseSpeaker",
    "SpeechHandle",
]
