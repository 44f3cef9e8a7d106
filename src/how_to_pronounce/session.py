"""Practice session state machine.

A session holds one target word and runs recognition attempts against an
injected recognizer:

    IDLE -> RECOGNIZING -> SCORING -> IDLE

Permission denial and engine errors go straight back to IDLE with an error
and skip scoring. Only one attempt can be active at a time.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from how_to_pronounce.config import Settings
from how_to_pronounce.errors import (
    EmptyWordError,
    PermissionDeniedError,
    PronounceError,
    RecognitionError,
)
from how_to_pronounce.logging import LogContext, get_logger
from how_to_pronounce.recognition.base import (
    RecognitionEvent,
    RecognitionOptions,
    SpeechRecognizer,
)
from how_to_pronounce.scoring import ScoreBand, needs_tip, score, score_band
from how_to_pronounce.tips import select_tip

logger = get_logger(__name__)


class SessionState(str, Enum):
    """Where the session is in the recognition cycle."""

    IDLE = "idle"
    RECOGNIZING = "recognizing"
    SCORING = "scoring"


class Attempt(BaseModel):
    """Outcome of one scored attempt."""

    model_config = ConfigDict(frozen=True)

    word: str
    transcript: str
    score: int
    band: ScoreBand
    tip: str | None = None


def normalize_word(raw: str) -> str:
    """Validate a word typed on the entry screen.

    Args:
        raw: Text as entered

    Returns:
        The word with surrounding whitespace removed

    Raises:
        EmptyWordError: If nothing but whitespace was entered
    """
    word = raw.strip() if raw else ""
    if not word:
        raise EmptyWordError()
    return word


def evaluate(word: str, transcript: str, settings: Settings | None = None) -> Attempt:
    """Score a transcript and pick a tip if the score is low enough."""
    settings = settings or Settings()
    value = score(word, transcript)
    tip = select_tip(word, transcript) if needs_tip(value, settings.tip_threshold) else None
    return Attempt(
        word=word,
        transcript=transcript,
        score=value,
        band=score_band(value, settings.tip_threshold, settings.fair_threshold),
        tip=tip,
    )


class PracticeSession:
    """Runs pronunciation attempts for a single word.

    Attributes:
        word: Target word, fixed for the life of the session
        state: Current state
        transcript: Transcript of the latest attempt, or None
        attempt: Scored result of the latest attempt, or None
        error: Error from the latest attempt, or None
        history: Every scored attempt in this session, oldest first
        engine_live: Whether the recognizer has reported ``start`` without ``end``
    """

    def __init__(
        self,
        word: str,
        recognizer: SpeechRecognizer,
        settings: Settings | None = None,
    ):
        self.word = normalize_word(word)
        self.recognizer = recognizer
        self.settings = settings or Settings()

        self.state = SessionState.IDLE
        self.transcript: str | None = None
        self.attempt: Attempt | None = None
        self.error: PronounceError | None = None
        self.history: list[Attempt] = []
        self.engine_live = False
        self._active = False

        self._handlers = {
            RecognitionEvent.START: self._on_start,
            RecognitionEvent.END: self._on_end,
            RecognitionEvent.RESULT: self._on_result,
            RecognitionEvent.ERROR: self._on_error,
        }
        for event, handler in self._handlers.items():
            recognizer.add_listener(event, handler)

    @property
    def score(self) -> int | None:
        return self.attempt.score if self.attempt else None

    @property
    def tip(self) -> str | None:
        return self.attempt.tip if self.attempt else None

    @property
    def options(self) -> RecognitionOptions:
        return RecognitionOptions(
            locale=self.settings.locale,
            interim_results=self.settings.interim_results,
            continuous=self.settings.continuous,
        )

    def start(self) -> bool:
        """Begin a recognition attempt.

        Returns:
            False if an attempt is already running (nothing happens), True
            otherwise, including when permission is denied
        """
        if self.state != SessionState.IDLE:
            logger.warning("Attempt already in progress", extra={"state": self.state.value})
            return False

        self.transcript = None
        self.attempt = None
        self.error = None

        if not self.recognizer.request_permission():
            self.error = PermissionDeniedError()
            logger.info(self.error.message, extra={"recognizer": self.recognizer.name})
            return True

        self.state = SessionState.RECOGNIZING
        self._active = True
        # Events fire synchronously inside start() for some recognizers
        with LogContext(recognizer=self.recognizer.name):
            logger.info("Recognition started", extra={"word": self.word})
            self.recognizer.start(self.options)
        return True

    def stop(self) -> None:
        """Stop listening and cancel the current attempt."""
        if not self._active:
            return
        self._active = False
        self.state = SessionState.IDLE
        logger.info("Recognition stopped by user")
        self.recognizer.stop()

    def close(self) -> None:
        """Detach from the recognizer."""
        self.stop()
        for event, handler in self._handlers.items():
            self.recognizer.remove_listener(event, handler)

    def _on_start(self) -> None:
        self.engine_live = True

    def _on_end(self) -> None:
        self.engine_live = False
        if self.state == SessionState.RECOGNIZING:
            # Engine finished without a result or error
            self._active = False
            self.state = SessionState.IDLE

    def _on_result(self, transcript: str) -> None:
        if not self._active:
            logger.debug("Ignoring result for cancelled attempt")
            return
        self._active = False

        self.transcript = transcript
        self.state = SessionState.SCORING
        self.attempt = evaluate(self.word, transcript, self.settings)
        self.history.append(self.attempt)
        logger.info(
            "Attempt scored",
            extra={"word": self.word, "transcript": transcript, "score": self.attempt.score},
        )
        self.state = SessionState.IDLE

    def _on_error(self, message: str) -> None:
        if not self._active:
            logger.debug("Ignoring error for cancelled attempt")
            return
        self._active = False

        self.error = RecognitionError(message)
        self.engine_live = False
        self.state = SessionState.IDLE
        logger.info(f"Recognition failed: {self.error.message}")
