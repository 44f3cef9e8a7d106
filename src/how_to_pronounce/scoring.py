"""Similarity scoring between a target word and what was heard.

The score is the Levenshtein distance between the two strings, normalized
by the longer length and mapped onto a 0-10 integer scale.
"""

from __future__ import annotations

import math
from enum import Enum

MAX_SCORE = 10

# Scores below this get an improvement tip
TIP_THRESHOLD = 8
# Scores at or above this are "fair" rather than "poor"
FAIR_THRESHOLD = 5


class ScoreBand(str, Enum):
    """Coarse rating of a score, used for colouring."""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @property
    def color(self) -> str:
        """Hex colour for rendering a score in this band."""
        return _BAND_COLORS[self]


_BAND_COLORS = {
    ScoreBand.GOOD: "#4CAF50",  # green
    ScoreBand.FAIR: "#FFC107",  # yellow
    ScoreBand.POOR: "#F44336",  # red
}


def edit_distance(a: str, b: str) -> int:
    """Calculate case-insensitive Levenshtein distance between two strings.

    Insertions, deletions and substitutions each cost 1.

    Args:
        a: First string
        b: Second string

    Returns:
        Number of edits needed
    """
    if len(a) < len(b):
        a, b = b, a

    if not b:
        return len(a)

    # Two rows are enough since each cell only looks one row back
    previous_row = list(range(len(b) + 1))
    current_row = [0] * (len(b) + 1)

    for i, c1 in enumerate(a):
        current_row[0] = i + 1
        for j, c2 in enumerate(b):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1.lower() != c2.lower())
            current_row[j + 1] = min(insertions, deletions, substitutions)
        previous_row, current_row = current_row, previous_row

    return previous_row[len(b)]


def similarity(word: str, transcript: str) -> float:
    """Normalized similarity in [0, 1]; 1.0 means identical ignoring case."""
    max_len = max(len(word), len(transcript), 1)
    return max(0.0, 1 - edit_distance(word, transcript) / max_len)


def score(word: str, transcript: str) -> int:
    """Score how closely a transcript matches the target word.

    Args:
        word: Target word
        transcript: Recognized speech

    Returns:
        Integer score from 0 to 10. Halves round up, so a similarity of
        0.25 scores 3.
    """
    return int(math.floor(similarity(word, transcript) * MAX_SCORE + 0.5))


def score_band(value: int, tip_threshold: int = TIP_THRESHOLD, fair_threshold: int = FAIR_THRESHOLD) -> ScoreBand:
    """Classify a score into a display band."""
    if value >= tip_threshold:
        return ScoreBand.GOOD
    if value >= fair_threshold:
        return ScoreBand.FAIR
    return ScoreBand.POOR


def needs_tip(value: int, threshold: int = TIP_THRESHOLD) -> bool:
    """Whether a score is low enough to show an improvement tip."""
    return value < threshold
