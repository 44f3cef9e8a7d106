"""Speech recognition module for how-to-pronounce.

Provides the recognizer interface the practice session depends on, plus
console, scripted and local Whisper implementations.
"""

from how_to_pronounce.recognition.base import (
    RecognitionEvent,
    RecognitionOptions,
    SpeechRecognizer,
)
from how_to_pronounce.recognition.console import ConsoleRecognizer
from how_to_pronounce.recognition.scripted import ScriptedOutcome, ScriptedRecognizer
from how_to_pronounce.recognition.whisper import WhisperFileRecognizer, clean_transcript

__all__ = [
    "RecognitionEvent",
    "RecognitionOptions",
    "SpeechRecognizer",
    "ConsoleRecognizer",
    "ScriptedOutcome",
    "ScriptedRecognizer",
    "WhisperFileRecognizer",
    "clean_transcript",
]
