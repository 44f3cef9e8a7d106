"""Command-line interface for how-to-pronounce.

Uses Typer for a modern, type-hinted CLI experience.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table


def load_env_files(user_env: Path | None = None, local_env: Path | str | None = None) -> None:
    """Load environment variables from .env files.

    Priority: local .env > ~/.how-to-pronounce/.env. Variables already set
    in the real environment win over the user-level file only.
    """
    user_env = user_env or Path.home() / ".how-to-pronounce" / ".env"
    if user_env.exists():
        load_dotenv(user_env)
    local_env = local_env or find_dotenv(usecwd=True)
    if local_env:
        load_dotenv(local_env, override=True)


load_env_files()

from how_to_pronounce import __version__
from how_to_pronounce.config import Settings, get_settings_path, load_settings, save_settings
from how_to_pronounce.errors import ConfigurationError, PronounceError, format_error_for_display
from how_to_pronounce.logging import LogLevel, set_verbosity
from how_to_pronounce.navigation import Location, Route, Router
from how_to_pronounce.recognition import (
    ConsoleRecognizer,
    ScriptedRecognizer,
    SpeechRecognizer,
    WhisperFileRecognizer,
)
from how_to_pronounce.screens import EntryScreen, PracticeScreen, render_attempt, run_app
from how_to_pronounce.session import evaluate, normalize_word
from how_to_pronounce.tips import TIP_RULES, match_rule

# Create the main Typer app
app = typer.Typer(
    name="how-to-pronounce",
    help="Practise pronouncing words and get a score with tips.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"how-to-pronounce version {__version__}")
        raise typer.Exit()


def _load_settings_or_exit(config_path: Path | None) -> Settings:
    try:
        return load_settings(config_path)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {escape(format_error_for_display(e))}")
        raise typer.Exit(1)


def _whisper_recognizer(audio: Path, settings: Settings) -> WhisperFileRecognizer:
    return WhisperFileRecognizer(
        audio,
        model=settings.whisper_model,
        backend=settings.whisper_backend,
    )


def build_recognizer(
    settings: Settings,
    audio: Path | None = None,
    said: str | None = None,
) -> SpeechRecognizer:
    """Pick the recognizer for a practice session.

    ``said`` wins over ``audio``, which wins over the configured recognizer.
    """
    if said is not None:
        return ScriptedRecognizer([said])
    if audio is not None:
        return _whisper_recognizer(audio, settings)
    if settings.recognizer == "whisper":
        console.print("[red]Error:[/red] The whisper recognizer needs a recording; pass --audio.")
        raise typer.Exit(1)
    return ConsoleRecognizer(console)


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Log progress information."),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log everything, including tip rule matches."),
    ] = False,
) -> None:
    """HowToPronounce - Word Pronunciation Practice.

    Type a word, say it, and get a [bold]0-10 score[/bold] plus a tip
    when the score is below 8.
    """
    if debug:
        set_verbosity(LogLevel.DEBUG)
    elif verbose:
        set_verbosity(LogLevel.VERBOSE)


@app.command()
def practice(
    word: Annotated[
        Optional[str],
        typer.Argument(help="Word to practise; asked for when omitted"),
    ] = None,
    audio: Annotated[
        Optional[Path],
        typer.Option("--audio", "-a", help="Score a recording with local Whisper instead of typing"),
    ] = None,
    said: Annotated[
        Optional[str],
        typer.Option("--said", "-s", help="Use this text as what was heard and exit after one attempt"),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Settings file to use"),
    ] = None,
) -> None:
    """Practise words interactively.

    Without [bold]--audio[/bold] the terminal stands in for a microphone:
    type what you said when asked.
    """
    settings = _load_settings_or_exit(config_path)

    if audio is not None and not audio.is_file():
        console.print(f"[red]Error:[/red] Audio file not found: {audio}")
        raise typer.Exit(1)

    # Shared across words so permission is only asked once
    recognizer = build_recognizer(settings, audio=audio, said=said)

    router = Router()
    if word is not None:
        try:
            router = Router(Location(Route.PRACTICE, {"word": normalize_word(word)}))
        except PronounceError as e:
            console.print(f"[red]{escape(e.message)}[/red]")
            raise typer.Exit(1)

    practice_screen = PracticeScreen(
        console,
        lambda: recognizer,
        settings,
        once=said is not None or audio is not None,
    )

    try:
        run_app(router, EntryScreen(console), practice_screen)
    except (EOFError, KeyboardInterrupt):
        console.print()

    session = practice_screen.last_session
    if session is not None and session.error is not None and practice_screen.once:
        raise typer.Exit(1)


@app.command()
def score(
    word: Annotated[str, typer.Argument(help="Target word")],
    transcript: Annotated[
        Optional[str],
        typer.Argument(help="What was heard; omit when using --audio"),
    ] = None,
    audio: Annotated[
        Optional[Path],
        typer.Option("--audio", "-a", help="Transcribe this recording with local Whisper"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON"),
    ] = False,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Settings file to use"),
    ] = None,
) -> None:
    """Score one attempt without the interactive screens."""
    settings = _load_settings_or_exit(config_path)

    try:
        word = normalize_word(word)
    except PronounceError as e:
        console.print(f"[red]{escape(e.message)}[/red]")
        raise typer.Exit(1)

    if transcript is None:
        if audio is None:
            console.print("[red]Error:[/red] Give a transcript or --audio.")
            raise typer.Exit(1)
        if not audio.is_file():
            console.print(f"[red]Error:[/red] Audio file not found: {audio}")
            raise typer.Exit(1)
        try:
            transcript = _whisper_recognizer(audio, settings).transcribe(
                language=settings.locale.split("-")[0].lower()
            )
        except ConfigurationError as e:
            console.print(f"[red]Error:[/red] {escape(e.message)}")
            raise typer.Exit(1)
        except (OSError, RuntimeError) as e:
            console.print(f"[red]Error:[/red] Could not transcribe {escape(audio.name)}: {escape(str(e))}")
            raise typer.Exit(1)

    attempt = evaluate(word, transcript, settings)

    if as_json:
        typer.echo(json.dumps(attempt.model_dump(mode="json")))
        return

    render_attempt(console, attempt)


@app.command()
def rules(
    word: Annotated[
        Optional[str],
        typer.Option("--word", "-w", help="Highlight the rule this word/transcript pair hits"),
    ] = None,
    transcript: Annotated[
        Optional[str],
        typer.Option("--transcript", "-t", help="Transcript to check with --word"),
    ] = None,
) -> None:
    """List the tip rules in the order they are checked."""
    matched = match_rule(word, transcript) if word and transcript else None

    table = Table(title="Tip rules (first match wins)")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Rule", style="cyan")
    table.add_column("Tip", style="white")

    for index, rule in enumerate(TIP_RULES, start=1):
        style = "bold green" if rule is matched else None
        table.add_row(str(index), rule.name, rule.message, style=style)

    console.print(table)

    if word and transcript:
        if matched:
            console.print(f"\n'{escape(transcript)}' for '{escape(word)}' matches rule [bold]{matched.name}[/bold].")
        else:
            console.print("\nNo rule applies.")


@app.command()
def config(
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Settings file to use"),
    ] = None,
    init: Annotated[
        bool,
        typer.Option("--init", help="Write a settings file with the defaults"),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing file with --init"),
    ] = False,
) -> None:
    """Show the effective settings."""
    path = config_path or get_settings_path()

    if init:
        if path.exists() and not force:
            console.print(f"[red]Error:[/red] Settings file already exists: {path}")
            console.print("Use --force to overwrite.")
            raise typer.Exit(1)
        saved = save_settings(Settings(), path)
        console.print(f"[green]Wrote default settings to {saved}[/green]")
        return

    settings = _load_settings_or_exit(config_path)

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    for name, value in settings.model_dump().items():
        table.add_row(name, str(value))
    console.print(table)

    source = path if path.exists() else "defaults"
    console.print(f"\n[dim]Source: {source}[/dim]")


if __name__ == "__main__":
    app()
