"""Recognizer that replays prepared outcomes.

Used for the ``--said`` CLI option and in tests: each start/stop cycle
pops the next queued transcript or error.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from how_to_pronounce.recognition.base import (
    RecognitionEvent,
    RecognitionOptions,
    SpeechRecognizer,
)


@dataclass(frozen=True)
class ScriptedOutcome:
    """One queued outcome: a transcript, or an error message if ``is_error``."""

    text: str
    is_error: bool = False


class ScriptedRecognizer(SpeechRecognizer):
    """Recognizer driven by a queue of outcomes.

    With ``auto_finish`` (the default) the queued outcome is delivered as
    soon as ``start`` is called, followed by ``end``. Without it, the
    outcome is held until ``finish`` is called, which lets tests observe the
    session while it is still recognizing.
    """

    def __init__(
        self,
        transcripts: list[str] | None = None,
        grant_permission: bool = True,
        auto_finish: bool = True,
    ):
        super().__init__()
        self._queue: deque[ScriptedOutcome] = deque(
            ScriptedOutcome(t) for t in (transcripts or [])
        )
        self.grant_permission = grant_permission
        self.auto_finish = auto_finish
        self.started_with: list[RecognitionOptions] = []
        self.listening = False
        self.stop_calls = 0

    @property
    def name(self) -> str:
        return "scripted"

    def queue_transcript(self, text: str) -> None:
        """Queue a transcript for a future cycle."""
        self._queue.append(ScriptedOutcome(text))

    def queue_error(self, message: str) -> None:
        """Queue an engine error for a future cycle."""
        self._queue.append(ScriptedOutcome(message, is_error=True))

    def request_permission(self) -> bool:
        return self.grant_permission

    def start(self, options: RecognitionOptions) -> None:
        self.started_with.append(options)
        self.listening = True
        self._emit(RecognitionEvent.START)
        if self.auto_finish:
            self.finish()

    def finish(self) -> None:
        """Deliver the next queued outcome and end the cycle."""
        if not self.listening:
            return
        if self._queue:
            outcome = self._queue.popleft()
        else:
            outcome = ScriptedOutcome("No speech detected", is_error=True)

        if outcome.is_error:
            self._emit(RecognitionEvent.ERROR, outcome.text)
        else:
            self._emit(RecognitionEvent.RESULT, outcome.text)
        self.listening = False
        self._emit(RecognitionEvent.END)

    def stop(self) -> None:
        self.stop_calls += 1
        if self.listening:
            self.listening = False
            self._emit(RecognitionEvent.END)
