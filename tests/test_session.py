"""Tests for the practice session state machine."""

import logging

import pytest

from how_to_pronounce.config import Settings
from how_to_pronounce.errors import EmptyWordError, PermissionDeniedError, RecognitionError
from how_to_pronounce.logging import LogConfig, LogLevel, configure_logging, set_verbosity
from how_to_pronounce.recognition import RecognitionOptions, ScriptedRecognizer
from how_to_pronounce.scoring import ScoreBand
from how_to_pronounce.session import (
    PracticeSession,
    SessionState,
    evaluate,
    normalize_word,
)


class TestNormalizeWord:
    """Tests for entry-screen word validation."""

    def test_strips_whitespace(self):
        """Test surrounding whitespace is removed."""
        assert normalize_word("  cut \n") == "cut"

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n"])
    def test_blank_rejected(self, raw):
        """Test blank input raises EmptyWordError."""
        with pytest.raises(EmptyWordError) as exc_info:
            normalize_word(raw)
        assert exc_info.value.message == "Please enter a word."


class TestEvaluate:
    """Tests for evaluate."""

    def test_low_score_gets_tip(self):
        """Test a score below 8 comes with a tip."""
        attempt = evaluate("cut", "cat")
        assert attempt.score == 7
        assert attempt.band == ScoreBand.FAIR
        assert attempt.tip == "The 'u' in 'cut' is like 'uh', not 'a' as in 'cat'."

    def test_high_score_has_no_tip(self):
        """Test a score of 8 or more has no tip."""
        attempt = evaluate("cat", "cat")
        assert attempt.score == 10
        assert attempt.band == ScoreBand.GOOD
        assert attempt.tip is None

    def test_custom_threshold(self):
        """Test the tip threshold comes from settings."""
        attempt = evaluate("cut", "cat", Settings(tip_threshold=6, fair_threshold=5))
        assert attempt.tip is None
        assert attempt.band == ScoreBand.GOOD

    def test_empty_transcript(self):
        """Test an empty transcript scores 0 with no tip."""
        attempt = evaluate("cut", "")
        assert attempt.score == 0
        assert attempt.band == ScoreBand.POOR
        assert attempt.tip is None


class TestPracticeSession:
    """Tests for PracticeSession."""

    def test_initial_state(self):
        """Test a new session is idle with nothing set."""
        session = PracticeSession(" kit ", ScriptedRecognizer())
        assert session.word == "kit"
        assert session.state == SessionState.IDLE
        assert session.transcript is None
        assert session.score is None
        assert session.tip is None
        assert session.error is None

    def test_blank_word_rejected(self):
        """Test a session cannot be created for a blank word."""
        with pytest.raises(EmptyWordError):
            PracticeSession("  ", ScriptedRecognizer())

    def test_successful_attempt(self):
        """Test a full start -> result cycle."""
        recognizer = ScriptedRecognizer(["keet"])
        session = PracticeSession("kit", recognizer)

        assert session.start() is True

        assert session.state == SessionState.IDLE
        assert session.transcript == "keet"
        assert session.score == 5
        assert session.tip == "Try to make the 'i' sound short, like in 'sit'."
        assert session.error is None
        assert len(session.history) == 1

    def test_start_options(self):
        """Test the recognizer is started with the configured options."""
        recognizer = ScriptedRecognizer(["cut"])
        session = PracticeSession("cut", recognizer, Settings(locale="en-GB"))
        session.start()
        assert recognizer.started_with == [
            RecognitionOptions(locale="en-GB", interim_results=False, continuous=False)
        ]

    def test_recognizing_state(self):
        """Test the session is recognizing until the engine delivers."""
        recognizer = ScriptedRecognizer(["cut"], auto_finish=False)
        session = PracticeSession("cut", recognizer)

        session.start()
        assert session.state == SessionState.RECOGNIZING
        assert session.engine_live is True

        recognizer.finish()
        assert session.state == SessionState.IDLE
        assert session.engine_live is False
        assert session.score == 10

    def test_only_one_attempt_at_a_time(self):
        """Test start is refused while an attempt is running."""
        recognizer = ScriptedRecognizer(["cut", "cat"], auto_finish=False)
        session = PracticeSession("cut", recognizer)

        assert session.start() is True
        assert session.start() is False
        assert len(recognizer.started_with) == 1

    def test_new_attempt_resets_results(self):
        """Test starting again clears the previous transcript, score and tip."""
        recognizer = ScriptedRecognizer(["cat"], auto_finish=False)
        recognizer.queue_transcript("cut")
        session = PracticeSession("cut", recognizer)

        session.start()
        recognizer.finish()
        assert session.score == 7

        session.start()
        assert session.transcript is None
        assert session.score is None
        assert session.tip is None

        recognizer.finish()
        assert session.score == 10
        assert [a.transcript for a in session.history] == ["cat", "cut"]

    def test_permission_denied(self):
        """Test permission denial sets an error and skips recognition."""
        recognizer = ScriptedRecognizer(["cut"], grant_permission=False)
        session = PracticeSession("cut", recognizer)

        assert session.start() is True

        assert session.state == SessionState.IDLE
        assert isinstance(session.error, PermissionDeniedError)
        assert session.error.message == "Microphone or speech recognition permission not granted."
        assert recognizer.started_with == []
        assert session.score is None

    def test_engine_error(self):
        """Test an engine error sets an error and skips scoring."""
        recognizer = ScriptedRecognizer()
        recognizer.queue_error("network unreachable")
        session = PracticeSession("cut", recognizer)

        session.start()

        assert session.state == SessionState.IDLE
        assert isinstance(session.error, RecognitionError)
        assert session.error.message == "network unreachable"
        assert session.score is None
        assert session.history == []

    def test_engine_error_default_message(self):
        """Test an empty engine error message gets a default."""
        recognizer = ScriptedRecognizer()
        recognizer.queue_error("")
        session = PracticeSession("cut", recognizer)

        session.start()
        assert session.error.message == "Speech recognition error"

    def test_error_cleared_on_restart(self):
        """Test a new attempt clears the previous error."""
        recognizer = ScriptedRecognizer()
        recognizer.queue_error("boom")
        recognizer.queue_transcript("cut")
        session = PracticeSession("cut", recognizer)

        session.start()
        assert session.error is not None

        session.start()
        assert session.error is None
        assert session.score == 10

    def test_stop_cancels_attempt(self):
        """Test a result arriving after stop is ignored."""
        recognizer = ScriptedRecognizer(["cut"], auto_finish=False)
        session = PracticeSession("cut", recognizer)

        session.start()
        session.stop()
        assert recognizer.stop_calls == 1
        assert session.state == SessionState.IDLE

        # Late delivery from the engine
        session._on_result("cut")
        assert session.transcript is None
        assert session.score is None

    def test_stop_when_idle_is_noop(self):
        """Test stop does nothing without an active attempt."""
        recognizer = ScriptedRecognizer()
        session = PracticeSession("cut", recognizer)
        session.stop()
        assert recognizer.stop_calls == 0

    def test_end_without_result_returns_to_idle(self):
        """Test the engine ending silently leaves the session idle."""
        recognizer = ScriptedRecognizer(auto_finish=False)
        session = PracticeSession("cut", recognizer)

        session.start()
        session._on_end()
        assert session.state == SessionState.IDLE
        assert session.start() is True

    def test_close_detaches(self):
        """Test a closed session ignores recognizer events."""
        recognizer = ScriptedRecognizer(["cut"])
        session = PracticeSession("cut", recognizer)
        session.close()

        recognizer.start(RecognitionOptions())
        assert session.transcript is None


class TestSessionLogging:
    """Tests for how session errors are logged."""

    def setup_method(self):
        self.records = []
        records = self.records

        class Capture(logging.Handler):
            def emit(self, record):
                records.append(record)

        self.handler = Capture()
        set_verbosity(LogLevel.DEBUG)
        logging.getLogger("how_to_pronounce.session").addHandler(self.handler)

    def teardown_method(self):
        logging.getLogger("how_to_pronounce.session").removeHandler(self.handler)
        configure_logging(LogConfig())

    def _levels(self, text):
        return [r.levelno for r in self.records if text in r.getMessage()]

    def test_permission_denied_logged_at_info(self):
        """Test denial is not logged as a warning, since the screen shows it."""
        session = PracticeSession("cut", ScriptedRecognizer(["cut"], grant_permission=False))

        session.start()

        assert self._levels("permission not granted") == [logging.INFO]

    def test_engine_error_logged_at_info(self):
        """Test engine errors are not logged as warnings, since the screen shows them."""
        recognizer = ScriptedRecognizer()
        recognizer.queue_error("network unreachable")
        session = PracticeSession("cut", recognizer)

        session.start()

        assert self._levels("network unreachable") == [logging.INFO]
        assert all(r.levelno < logging.WARNING for r in self.records)
