"""Voice session state machine.

Coordinates listening, recognition intake, command processing, and speech
playback:

    IDLE -> LISTENING -> PROCESSING -> SPEAKING -> LISTENING (continuous)
                                               -> IDLE       (single shot)

Only one command is dispatched at a time. Final results that arrive while
a command is processing or being spoken are held in a single pending slot
in continuous mode and dropped otherwise. Stopping the session cancels
speech and discards the result of any in-flight command, but a network
write that was already sent still completes.
"""

from __future__ import annotations

import asyncio
import dataclasses
from collections import deque
from typing import Callable

from voicedesk.logging_config import command_context, get_logger
from voicedesk.voice.config import SessionConfig, SpeechConfig
from voicedesk.voice.errors import (
    PermissionDeniedError,
    RecognitionUnsupportedError,
    VoiceError,
)
from voicedesk.voice.models import (
    ActionOutcome,
    Command,
    Language,
    Phase,
    RecognitionEvent,
    SessionState,
)
from voicedesk.voice.parser.command_router import CommandRouter
from voicedesk.voice.parser.intent_parser import parse_command
from voicedesk.voice.recognition.base import BaseRecognizer
from voicedesk.voice.recognition.speech import BaseSpeaker, SpeechHandle

logger = get_logger(__name__)

StateCallback = Callable[[SessionState, SessionState], None]
ErrorCallback = Callable[[VoiceError], None]


class SessionController:
    """Owns the SessionState and drives one voice session at a time.

    Args:
        recognizer: Microphone/STT capability.
        speaker: TTS capability.
        router: Dispatcher for accepted commands.
        config: Initial language, continuous mode, threshold, history size.
        speech_config: Language -> TTS locale mapping.
        on_state_change: Called with (old, new) after every state change.
        on_error: Called once when the session cannot start listening.
    """

    def __init__(
        self,
        recognizer: BaseRecognizer,
        speaker: BaseSpeaker,
        router: CommandRouter,
        config: SessionConfig | None = None,
        speech_config: SpeechConfig | None = None,
        on_state_change: StateCallback | None = None,
        on_error: ErrorCallback | None = None,
    ):
        config = config or SessionConfig()
        self._recognizer = recognizer
        self._speaker = speaker
        self._router = router
        self._speech_config = speech_config or SpeechConfig()
        self._on_state_change = on_state_change
        self._on_error = on_error

        self._state = SessionState(
            language=Language(config.language),
            continuous=config.continuous,
            confidence_threshold=config.confidence_threshold,
        )
        self._history: deque[Command] = deque(maxlen=config.history_limit)
        self._last_outcome: ActionOutcome | None = None
        self._pending: RecognitionEvent | None = None
        self._speech: SpeechHandle | None = None
        self._dispatch_lock = asyncio.Lock()
        # Bumped on every start/stop; work started under an older value is stale
        self._generation = 0
        self.current_transcript = ""

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def history(self) -> list[Command]:
        """Most recent commands, oldest first."""
        return list(self._history)

    @property
    def last_outcome(self) -> ActionOutcome | None:
        return self._last_outcome

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    # -------------------------------------------------------------------------
    # Session lifecycle
    # -------------------------------------------------------------------------

    async def start_session(self) -> bool:
        """Start listening. Returns False if recognition cannot start.

        A no-op while a session is already active.
        """
        if self._state.phase != Phase.IDLE:
            logger.debug("start_ignored", phase=self._state.phase.value)
            return True

        if not self._recognizer.is_available:
            self._report(RecognitionUnsupportedError(
                f"Speech recognition ({self._recognizer.name}) is not supported here"
            ))
            return False

        try:
            await self._recognizer.start(self._locale())
        except (RecognitionUnsupportedError, PermissionDeniedError) as e:
            self._report(e)
            return False

        self._generation += 1
        self._pending = None
        self.current_transcript = ""
        self._transition(Phase.LISTENING)
        return True

    async def stop_session(self) -> None:
        """Stop listening, cancel speech, and ignore any in-flight result.

        Safe to call repeatedly.
        """
        self._generation += 1
        self._pending = None
        self._cancel_speech()

        if self._state.phase == Phase.IDLE:
            return

        self._transition(Phase.IDLE)
        await self._release_microphone()

    async def toggle_session(self) -> bool:
        """Start when idle, stop otherwise. Returns whether a session is active."""
        if self._state.phase == Phase.IDLE:
            return await self.start_session()
        await self.stop_session()
        return False

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    def set_language(self, language: Language | str) -> None:
        """Switch feedback language. Recognition picks it up on next start."""
        self._update_state(language=Language(language))

    def update_settings(
        self,
        continuous: bool | None = None,
        confidence_threshold: float | None = None,
    ) -> None:
        changes: dict[str, object] = {}
        if continuous is not None:
            changes["continuous"] = continuous
        if confidence_threshold is not None:
            if not 0.0 <= confidence_threshold <= 1.0:
                raise ValueError(
                    f"confidence_threshold must be between 0 and 1, got {confidence_threshold}"
                )
            changes["confidence_threshold"] = confidence_threshold
        if changes:
            self._update_state(**changes)

    # -------------------------------------------------------------------------
    # Recognition intake
    # -------------------------------------------------------------------------

    async def handle_recognition_result(
        self, event: RecognitionEvent
    ) -> ActionOutcome | None:
        """Accept one recognition event from the STT capability.

        Returns the outcome when this call processed the event, else None
        (interim, low confidence, queued, dropped, or session idle). A
        queued event is processed by the call that is already running.
        """
        phase = self._state.phase
        if phase == Phase.IDLE:
            logger.debug("recognition_ignored", reason="idle")
            return None

        self.current_transcript = event.transcript
        if not event.is_final:
            return None

        if event.confidence < self._state.confidence_threshold:
            logger.debug(
                "recognition_discarded",
                confidence=event.confidence,
                threshold=self._state.confidence_threshold,
            )
            return None

        if not event.transcript.strip():
            return None

        if phase in (Phase.PROCESSING, Phase.SPEAKING):
            if self._state.continuous and self._pending is None:
                self._pending = event
                logger.info("recognition_queued", transcript=event.transcript)
            else:
                logger.info("recognition_dropped", transcript=event.transcript)
            return None

        return await self._process(event)

    def speak(self, text: str) -> SpeechHandle | None:
        """Speak arbitrary text, interrupting any current utterance."""
        return self._start_speech(text)

    # -------------------------------------------------------------------------
    # Processing
    # -------------------------------------------------------------------------

    async def _process(self, event: RecognitionEvent) -> ActionOutcome:
        generation = self._generation
        outcome = await self._process_one(event, generation)

        while generation == self._generation and self._pending is not None:
            queued, self._pending = self._pending, None
            if self._state.phase != Phase.LISTENING:
                logger.info("recognition_dropped", transcript=queued.transcript)
                break
            await self._process_one(queued, generation)

        return outcome

    async def _process_one(
        self, event: RecognitionEvent, generation: int
    ) -> ActionOutcome:
        command = parse_command(event.transcript, event.confidence)
        self._history.append(command)

        with command_context(command.id, command.intent.value):
            logger.info("command_accepted", confidence=command.confidence)
            try:
                self._transition(Phase.PROCESSING)
                async with self._dispatch_lock:
                    outcome = await self._router.dispatch(command)
                self._last_outcome = outcome

                if generation != self._generation:
                    logger.info("outcome_discarded", reason="session_stopped")
                    return outcome

                logger.info("command_completed", outcome=outcome.kind.value)

                if outcome.spoken_text:
                    self._transition(Phase.SPEAKING)
                    await self._play(outcome.spoken_text)
            finally:
                # Leave PROCESSING/SPEAKING even when dispatch or a callback raised
                if generation == self._generation:
                    await self._finish_command()

        return outcome

    async def _finish_command(self) -> None:
        if self._state.continuous:
            self._transition(Phase.LISTENING)
        else:
            self._transition(Phase.IDLE)
            await self._release_microphone()

    # -------------------------------------------------------------------------
    # Speech
    # -------------------------------------------------------------------------

    async def _play(self, text: str) -> None:
        handle = self._start_speech(text)
        if handle is None:
            return
        try:
            await handle.wait()
        except Exception as e:
            logger.warning("speech_failed", error=str(e))

    def _start_speech(self, text: str) -> SpeechHandle | None:
        self._cancel_speech()
        try:
            self._speech = self._speaker.speak(text, self._locale())
        except Exception as e:
            logger.warning("speech_failed", error=str(e))
            self._speech = None
        return self._speech

    def _cancel_speech(self) -> None:
        if self._speech is not None:
            try:
                self._speech.cancel()
            except Exception as e:
                logger.warning("speech_cancel_failed", error=str(e))
            self._speech = None

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _locale(self) -> str:
        return self._speech_config.locale_for(self._state.language)

    async def _release_microphone(self) -> None:
        try:
            await self._recognizer.stop()
        except Exception as e:
            logger.warning("recognizer_stop_failed", error=str(e))

    def _report(self, error: VoiceError) -> None:
        logger.warning("session_start_failed", error_type=type(error).__name__, error=str(error))
        if self._on_error:
            self._on_error(error)

    def _transition(self, phase: Phase) -> None:
        if self._state.phase == phase:
            return
        self._update_state(phase=phase)
        logger.debug("phase_changed", phase=phase.value)

    def _update_state(self, **changes: object) -> None:
        old = self._state
        self._state = dataclasses.replace(old, **changes)
        if self._on_state_change:
            self._on_state_change(old, self._state)
