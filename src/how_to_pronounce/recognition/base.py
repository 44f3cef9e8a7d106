"""Base classes for speech recognizers.

Defines the interface the practice session talks to. A recognizer asks for
permission, starts and stops listening, and reports back through events:
``start``, ``end``, ``result`` (with the transcript) and ``error`` (with a
message). Exactly one ``result`` or ``error`` is emitted per start/stop
cycle.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from how_to_pronounce.logging import get_logger

logger = get_logger(__name__)


class RecognitionEvent(str, Enum):
    """Events a recognizer emits."""

    START = "start"
    END = "end"
    RESULT = "result"
    ERROR = "error"


@dataclass(frozen=True)
class RecognitionOptions:
    """Options passed to a recognizer when it starts listening."""

    locale: str = "en-US"
    interim_results: bool = False
    continuous: bool = False


Listener = Callable[..., None]


class SpeechRecognizer(ABC):
    """Abstract base class for speech recognizers.

    Subclasses implement permission handling and the start/stop cycle and
    call ``_emit`` to deliver events to registered listeners.
    """

    def __init__(self) -> None:
        self._listeners: dict[RecognitionEvent, list[Listener]] = {
            event: [] for event in RecognitionEvent
        }

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the recognizer name."""
        pass

    @abstractmethod
    def request_permission(self) -> bool:
        """Ask for microphone/speech permission.

        Returns:
            True if permission was granted
        """
        pass

    @abstractmethod
    def start(self, options: RecognitionOptions) -> None:
        """Start listening.

        Args:
            options: Locale and result delivery options
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop listening."""
        pass

    def add_listener(self, event: RecognitionEvent | str, listener: Listener) -> None:
        """Register a callback for an event.

        ``result`` listeners receive the transcript and ``error`` listeners
        the message; ``start`` and ``end`` listeners take no arguments.
        """
        self._listeners[RecognitionEvent(event)].append(listener)

    def remove_listener(self, event: RecognitionEvent | str, listener: Listener) -> None:
        """Unregister a callback previously added with ``add_listener``."""
        self._listeners[RecognitionEvent(event)].remove(listener)

    def _emit(self, event: RecognitionEvent, *args: Any) -> None:
        logger.debug(f"{self.name} emitted {event.value}")
        for listener in list(self._listeners[event]):
            listener(*args)
