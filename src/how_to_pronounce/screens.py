"""Terminal screens for word entry and practice.

Each screen reads input, renders with Rich, and tells the router where to
go next. Errors are shown inline and never leave the screen.
"""

from __future__ import annotations

from typing import Callable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.text import Text

from how_to_pronounce.config import Settings
from how_to_pronounce.errors import EmptyWordError
from how_to_pronounce.logging import get_logger
from how_to_pronounce.navigation import Route, Router
from how_to_pronounce.recognition.base import SpeechRecognizer
from how_to_pronounce.scoring import MAX_SCORE
from how_to_pronounce.session import Attempt, PracticeSession, normalize_word

logger = get_logger(__name__)


def render_attempt(console: Console, attempt: Attempt) -> None:
    """Show what was heard, the score and the tip (if any)."""
    console.print("[dim]You said:[/dim]")
    console.print(f"[bold]{escape(attempt.transcript)}[/bold]")

    score_text = Text(f" {attempt.score}/{MAX_SCORE} ", style=f"bold white on {attempt.band.color}")
    console.print(score_text)

    if attempt.tip:
        console.print(
            Panel(
                attempt.tip,
                title="Tip to improve:",
                title_align="left",
                border_style="#FFD54F",
                expand=False,
            )
        )


class EntryScreen:
    """Asks for the word to practise."""

    def __init__(self, console: Console):
        self.console = console

    def show(self, router: Router) -> None:
        self.console.print(Panel.fit("[bold]HowToPronounce[/bold]"))
        while True:
            raw = Prompt.ask(
                "Enter a word to practice [dim](e.g. cut, kit, amend)[/dim]",
                console=self.console,
                default="",
                show_default=False,
            )
            try:
                word = normalize_word(raw)
            except EmptyWordError as e:
                self.console.print(f"[red]{e.message}[/red]")
                continue
            router.replace(Route.PRACTICE, word=word)
            return


class PracticeScreen:
    """Runs attempts for one word until the user moves on.

    Args:
        console: Output console
        recognizer_factory: Builds the recognizer for a session
        settings: Session settings
        once: Leave after the first attempt instead of offering a menu
    """

    CHOICES = ["r", "n", "q"]

    def __init__(
        self,
        console: Console,
        recognizer_factory: Callable[[], SpeechRecognizer],
        settings: Settings | None = None,
        once: bool = False,
    ):
        self.console = console
        self.recognizer_factory = recognizer_factory
        self.settings = settings or Settings()
        self.once = once
        self.last_session: PracticeSession | None = None

    def render(self, session: PracticeSession) -> None:
        if session.attempt is not None:
            if session.transcript:
                render_attempt(self.console, session.attempt)
            else:
                self.console.print("[dim]Nothing was heard.[/dim]")
        if session.error is not None:
            self.console.print(f"[red]{escape(session.error.message)}[/red]")

    def show(self, router: Router) -> None:
        word = router.current.params["word"]
        session = PracticeSession(word, self.recognizer_factory(), self.settings)
        self.last_session = session

        self.console.print("\n[bold]Pronounce the word:[/bold]")
        self.console.print(f"[bold #2196F3]{escape(session.word)}[/]\n")

        try:
            while True:
                session.start()
                self.render(session)

                if self.once:
                    router.replace(Route.EXIT)
                    return

                choice = Prompt.ask(
                    "\n\\[r] record again  \\[n] try another word  \\[q] quit",
                    console=self.console,
                    choices=self.CHOICES,
                    default="r",
                    show_choices=False,
                )
                if choice == "n":
                    router.replace(Route.ENTRY)
                    return
                if choice == "q":
                    router.replace(Route.EXIT)
                    return
        finally:
            session.close()


def run_app(
    router: Router,
    entry: EntryScreen,
    practice: PracticeScreen,
) -> None:
    """Show screens until the router reaches the exit route."""
    screens = {Route.ENTRY: entry, Route.PRACTICE: practice}
    while not router.finished:
        logger.debug(f"Showing {router.current.route.value} screen")
        screens[router.current.route].show(router)
