"""Tests for similarity scoring."""

import pytest

from how_to_pronounce.scoring import (
    ScoreBand,
    edit_distance,
    needs_tip,
    score,
    score_band,
    similarity,
)


class TestEditDistance:
    """Tests for edit_distance."""

    def test_identical(self):
        """Test identical strings have no edits."""
        assert edit_distance("kitten", "kitten") == 0

    def test_classic_example(self):
        """Test the kitten/sitting example."""
        assert edit_distance("kitten", "sitting") == 3

    def test_case_insensitive(self):
        """Test that case differences cost nothing."""
        assert edit_distance("Cut", "cUT") == 0

    def test_empty(self):
        """Test distance against empty strings."""
        assert edit_distance("", "") == 0
        assert edit_distance("word", "") == 4
        assert edit_distance("", "word") == 4

    def test_single_operations(self):
        """Test one substitution, insertion and deletion."""
        assert edit_distance("cut", "cat") == 1
        assert edit_distance("cat", "cats") == 1
        assert edit_distance("drum", "rum") == 1

    def test_symmetric(self):
        """Test argument order does not matter."""
        assert edit_distance("amend", "amended") == edit_distance("amended", "amend")

    def test_lowercase_expansion_counts_once(self):
        """Test a character that lower-cases to two code points is one edit."""
        # "İ".lower() is "i" plus a combining dot
        assert len("İ".lower()) == 2
        assert edit_distance("İxxxxxxxxx", "xxxxxxxxxx") == 1
        assert score("İxxxxxxxxx", "xxxxxxxxxx") == 9

    def test_lowercase_expansion_self_match(self):
        """Test such a character still matches itself."""
        assert edit_distance("İstanbul", "İSTANBUL") == 0


class TestScore:
    """Tests for score."""

    @pytest.mark.parametrize("word", ["", "a", "cut", "Amend", "pronunciation"])
    def test_identical_scores_ten(self, word):
        """Test a word always scores 10 against itself."""
        assert score(word, word) == 10

    def test_case_insensitive(self):
        """Test mixed case still scores 10."""
        assert score("Cut", "cut") == 10

    def test_both_empty(self):
        """Test two empty strings score 10."""
        assert score("", "") == 10

    def test_empty_transcript(self):
        """Test a missing transcript scores 0."""
        assert score("cut", "") == 0
        assert score("a", "") == 0

    def test_cut_cat(self):
        """Test cut vs cat: one edit over three letters rounds to 7."""
        assert score("cut", "cat") == 7

    def test_half_rounds_up(self):
        """Test exact halves round up."""
        # 1 edit over 4 letters -> 7.5
        assert score("kick", "kic") == 8
        # 3 edits over 4 letters -> 2.5
        assert score("kick", "k") == 3

    def test_completely_different(self):
        """Test unrelated strings score 0."""
        assert score("cut", "dog") == 0

    def test_longer_transcript_clamps(self):
        """Test score never goes below 0."""
        assert score("a", "xyzxyzxyz") == 0

    @pytest.mark.parametrize(
        "a,b",
        [("cut", "cat"), ("kit", "keet"), ("amend", "a men"), ("drum", "grum"), ("", "abc")],
    )
    def test_symmetric(self, a, b):
        """Test score(a, b) == score(b, a)."""
        assert score(a, b) == score(b, a)

    def test_range(self):
        """Test scores stay within 0-10."""
        pairs = [("a", "b"), ("cat", "cattle"), ("dream", "scream"), ("x", "")]
        for a, b in pairs:
            assert 0 <= score(a, b) <= 10

    def test_similarity_matches_score(self):
        """Test score is similarity scaled to 10."""
        assert similarity("cut", "cat") == pytest.approx(2 / 3)
        assert similarity("", "") == 1.0


class TestScoreBand:
    """Tests for score bands and the tip threshold."""

    def test_bands(self):
        """Test default band boundaries."""
        assert score_band(10) == ScoreBand.GOOD
        assert score_band(8) == ScoreBand.GOOD
        assert score_band(7) == ScoreBand.FAIR
        assert score_band(5) == ScoreBand.FAIR
        assert score_band(4) == ScoreBand.POOR
        assert score_band(0) == ScoreBand.POOR

    def test_custom_thresholds(self):
        """Test bands follow custom thresholds."""
        assert score_band(6, tip_threshold=6, fair_threshold=3) == ScoreBand.GOOD
        assert score_band(3, tip_threshold=6, fair_threshold=3) == ScoreBand.FAIR

    def test_colors(self):
        """Test band colours."""
        assert ScoreBand.GOOD.color == "#4CAF50"
        assert ScoreBand.FAIR.color == "#FFC107"
        assert ScoreBand.POOR.color == "#F44336"

    def test_needs_tip(self):
        """Test tips are only wanted below 8 by default."""
        assert needs_tip(7)
        assert not needs_tip(8)
        assert not needs_tip(10)
        assert needs_tip(8, threshold=9)
