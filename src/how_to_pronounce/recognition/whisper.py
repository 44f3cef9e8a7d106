"""Recognizer backed by a local Whisper model.

Transcribes a recorded audio file instead of a live microphone. Supports
the same backends as a typical local Whisper setup:
- openai-whisper: Original OpenAI Whisper (PyTorch)
- faster-whisper: CTranslate2-based implementation
"""

from __future__ import annotations

import string
from pathlib import Path
from typing import Any, Literal

from how_to_pronounce.errors import ConfigurationError
from how_to_pronounce.logging import get_logger
from how_to_pronounce.recognition.base import (
    RecognitionEvent,
    RecognitionOptions,
    SpeechRecognizer,
)

logger = get_logger(__name__)

WhisperBackend = Literal["openai-whisper", "faster-whisper", "auto"]

# Whisper punctuates and capitalises; a single spoken word should compare bare
_STRIP_CHARS = string.whitespace + string.punctuation


def clean_transcript(text: str) -> str:
    """Collapse whitespace and strip surrounding punctuation from Whisper output."""
    return " ".join(text.split()).strip(_STRIP_CHARS)


class WhisperFileRecognizer(SpeechRecognizer):
    """Recognizer that transcribes an audio file with local Whisper.

    Each start/stop cycle transcribes the same file. Backend and model
    problems are reported as ``error`` events rather than raised, like any
    other engine failure.
    """

    DEFAULT_MODEL = "base"

    AVAILABLE_MODELS = ["tiny", "base", "small", "medium", "large", "large-v2", "large-v3"]

    def __init__(
        self,
        audio_path: Path | str,
        model: str = DEFAULT_MODEL,
        backend: WhisperBackend = "auto",
        device: str = "cpu",
    ):
        """Initialize the recognizer.

        Args:
            audio_path: Recording to transcribe
            model: Model size (tiny, base, small, medium, large, ...)
            backend: Which backend to use ("auto", "openai-whisper", "faster-whisper")
            device: Device to use ("cpu", "cuda")
        """
        super().__init__()
        self.audio_path = Path(audio_path)
        self._model_name = model
        self._backend = backend
        self._device = device
        self._model: Any = None
        self._resolved_backend: str | None = None

    @property
    def name(self) -> str:
        return "whisper"

    def request_permission(self) -> bool:
        # Reading a file needs no microphone; the file just has to be there
        return self.audio_path.is_file()

    @staticmethod
    def _check_openai_whisper() -> bool:
        try:
            import whisper  # noqa: F401
            return True
        except ImportError:
            return False

    @staticmethod
    def _check_faster_whisper() -> bool:
        try:
            import faster_whisper  # noqa: F401
            return True
        except ImportError:
            return False

    def is_available(self) -> bool:
        """Check whether any Whisper backend is installed."""
        return self._check_openai_whisper() or self._check_faster_whisper()

    def _resolve_backend(self) -> str:
        """Resolve which backend to use based on config and availability.

        Raises:
            ConfigurationError: If the requested backend is not installed
        """
        if self._resolved_backend is not None:
            return self._resolved_backend

        if self._backend in ("openai-whisper", "auto") and self._check_openai_whisper():
            self._resolved_backend = "openai-whisper"
        elif self._backend in ("faster-whisper", "auto") and self._check_faster_whisper():
            self._resolved_backend = "faster-whisper"
        elif self._backend == "auto":
            raise ConfigurationError(
                "No local Whisper backend available. Install one of:\n"
                "  pip install openai-whisper\n"
                "  pip install faster-whisper"
            )
        else:
            raise ConfigurationError(
                f"{self._backend} backend requested but not installed. "
                f"Install with: pip install {self._backend}"
            )

        return self._resolved_backend

    def _load_model(self) -> Any:
        if self._model is not None:
            return self._model

        backend = self._resolve_backend()
        logger.info(
            f"Loading Whisper model '{self._model_name}'",
            extra={"backend": backend, "device": self._device},
        )
        if backend == "openai-whisper":
            import whisper

            self._model = whisper.load_model(self._model_name, device=self._device)
        else:
            from faster_whisper import WhisperModel

            compute_type = "float16" if self._device == "cuda" else "int8"
            self._model = WhisperModel(self._model_name, device=self._device, compute_type=compute_type)
        return self._model

    def transcribe(self, language: str = "en") -> str:
        """Transcribe the audio file.

        Args:
            language: Two-letter language code

        Returns:
            Cleaned transcript text
        """
        model = self._load_model()

        if self._resolved_backend == "openai-whisper":
            result = model.transcribe(str(self.audio_path), language=language, verbose=False)
            text = result.get("text", "")
        else:
            segments, _info = model.transcribe(str(self.audio_path), language=language)
            text = " ".join(segment.text for segment in segments)

        return clean_transcript(text)

    def start(self, options: RecognitionOptions) -> None:
        self._emit(RecognitionEvent.START)
        language = options.locale.split("-")[0].lower()
        try:
            transcript = self.transcribe(language=language)
        except ConfigurationError as e:
            self._emit(RecognitionEvent.ERROR, e.message)
        except (OSError, RuntimeError) as e:
            logger.warning(f"Whisper transcription failed: {e}", extra={"audio": str(self.audio_path)})
            self._emit(RecognitionEvent.ERROR, f"Could not transcribe {self.audio_path.name}: {e}")
        else:
            self._emit(RecognitionEvent.RESULT, transcript)
        self._emit(RecognitionEvent.END)

    def stop(self) -> None:
        # Transcription runs to completion inside start(); nothing to cancel
        pass
