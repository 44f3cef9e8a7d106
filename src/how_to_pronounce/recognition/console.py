"""Terminal stand-in for a microphone recognizer.

There is no audio here: the user types what they said. Useful for trying
the scoring and tips without any speech backend installed.
"""

from __future__ import annotations

from rich.console import Console
from rich.prompt import Confirm, Prompt

from how_to_pronounce.recognition.base import (
    RecognitionEvent,
    RecognitionOptions,
    SpeechRecognizer,
)


class ConsoleRecognizer(SpeechRecognizer):
    """Recognizer that reads the "spoken" transcript from the terminal."""

    def __init__(self, console: Console | None = None, ask_permission: bool = True):
        super().__init__()
        self.console = console or Console()
        self.ask_permission = ask_permission
        self._granted: bool | None = None
        self._listening = False

    @property
    def name(self) -> str:
        return "console"

    def request_permission(self) -> bool:
        # Asked once per process, like a platform permission dialog
        if self._granted is None:
            if self.ask_permission:
                self._granted = Confirm.ask(
                    "Allow how-to-pronounce to listen to you?",
                    console=self.console,
                    default=True,
                )
            else:
                self._granted = True
        return self._granted

    def start(self, options: RecognitionOptions) -> None:
        self._listening = True
        self._emit(RecognitionEvent.START)
        self.console.print(f"[dim]Listening ({options.locale})... type what you said.[/dim]")
        spoken = Prompt.ask("[bold]>[/bold]", console=self.console, default="", show_default=False)
        if not self._listening:
            return
        self._listening = False
        self._emit(RecognitionEvent.RESULT, spoken.strip())
        self._emit(RecognitionEvent.END)

    def stop(self) -> None:
        if self._listening:
            self._listening = False
            self._emit(RecognitionEvent.END)
