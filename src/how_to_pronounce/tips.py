"""Rule-based pronunciation tips.

Rules are checked in order and the first match wins. Specific vowel and
consonant confusions come before the generic heuristics, and the last rule
always matches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from how_to_pronounce.logging import get_logger

logger = get_logger(__name__)

SHORT_I_WORDS = frozenset({"kit", "kid", "kick"})
SHORT_U_WORDS = frozenset({"cut", "cup"})
SHORT_A_WORDS = frozenset({"cap", "cat"})


@dataclass(frozen=True)
class TipRule:
    """A tip and the condition under which it applies.

    Attributes:
        name: Short identifier for the rule
        matches: Predicate over (word, transcript), both already lower-cased
            and non-empty
        message: Tip shown to the user
    """

    name: str
    matches: Callable[[str, str], bool]
    message: str


def _length_mismatch(word: str, transcript: str) -> bool:
    return len(word) > 4 and len(transcript) > 0 and abs(len(word) - len(transcript)) > 2


TIP_RULES: tuple[TipRule, ...] = (
    TipRule(
        "short_i",
        lambda w, t: w in SHORT_I_WORDS and "keet" in t,
        "Try to make the 'i' sound short, like in 'sit'.",
    ),
    TipRule(
        "short_u",
        lambda w, t: w in SHORT_U_WORDS and "cat" in t,
        "The 'u' in 'cut' is like 'uh', not 'a' as in 'cat'.",
    ),
    TipRule(
        "short_a",
        lambda w, t: w in SHORT_A_WORDS and "cup" in t,
        "The 'a' in 'cap' is a short, open sound, not 'uh'.",
    ),
    TipRule(
        "final_d",
        lambda w, t: w.endswith("d") and not t.endswith("d"),
        "Make sure to pronounce the ending 'd' sound.",
    ),
    TipRule(
        "final_t",
        lambda w, t: w.endswith("t") and not t.endswith("t"),
        "Try to finish with a clear 't' sound at the end.",
    ),
    TipRule(
        "initial_dr",
        lambda w, t: w.startswith("dr") and t.startswith("gr"),
        "Start with a 'd' sound, not 'g'.",
    ),
    TipRule(
        "initial_sound",
        lambda w, t: t[0] != w[0],
        "Try to start the word with the correct sound.",
    ),
    TipRule(
        "syllables",
        _length_mismatch,
        "Try to match the number of syllables in the word.",
    ),
    TipRule(
        "general",
        lambda w, t: True,
        "Listen carefully to the word and try to match each sound.",
    ),
)


def match_rule(word: str, transcript: str, rules: tuple[TipRule, ...] = TIP_RULES) -> TipRule | None:
    """Find the first rule that applies to a word/transcript pair.

    Args:
        word: Target word
        transcript: Recognized speech
        rules: Ordered rules to check

    Returns:
        The first matching rule, or None if either input is empty or
        nothing matched
    """
    if not word or not transcript:
        return None

    w = word.lower()
    t = transcript.lower()

    for rule in rules:
        if rule.matches(w, t):
            logger.debug(f"Tip rule matched: {rule.name}", extra={"word": w, "transcript": t})
            return rule
    return None


def select_tip(word: str, transcript: str) -> str | None:
    """Pick an improvement tip for a word/transcript pair.

    Returns None when either input is empty. Otherwise a tip is always
    returned, even for a perfect match, since the last rule is a catch-all.
    """
    rule = match_rule(word, transcript)
    return rule.message if rule else None
