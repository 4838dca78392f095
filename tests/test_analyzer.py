import math
import pytest
from juggleforge.analyzer import PatternAnalyzer, difficulty_score, difficulty_level
from juggleforge.sequence import PatternType

ANALYZER = PatternAnalyzer()


def analyzed(pattern):
    analysis = ANALYZER.analyze(pattern)
    assert analysis is not None, pattern
    return analysis


# ============================================================
# Difficulty
# ============================================================

class TestDifficulty:

    def test_cascade(self):
        assert difficulty_score([3]) == pytest.approx(1.2 + 0.2 * math.log(2))

    def test_box(self):
        expected = 0.4 * 3 + 0.3 * (8 / 3) + 0.2 * math.log(4)
        assert difficulty_score([5, 3, 1]) == pytest.approx(expected)

    def test_high_throw_bonus(self):
        expected = 0.4 * 4 + 0.3 * 9 + 0.2 * math.log(3) + 0.1 * 0.3
        assert difficulty_score([7, 1]) == pytest.approx(expected)

    def test_gap_bonus(self):
        expected = 0.4 * 3 + 0.3 * 9 + 0.2 * math.log(3) + 0.1 * 0.2
        assert difficulty_score([6, 0]) == pytest.approx(expected)

    def test_sync_bonus(self):
        plain = difficulty_score([4, 4], PatternType.ASYNC)
        sync = difficulty_score([4, 4], PatternType.SYNC)
        assert sync - plain == pytest.approx(0.05)

    def test_multiplex_bonus(self):
        plain = difficulty_score([3, 3], PatternType.ASYNC)
        multiplex = difficulty_score([3, 3], PatternType.MULTIPLEX)
        assert multiplex - plain == pytest.approx(0.07)

    def test_clamped_low(self):
        assert difficulty_score([1]) == 1.0

    def test_clamped_high(self):
        assert difficulty_score([35]) == 10.0

    def test_empty(self):
        assert difficulty_score([]) == 1.0

    def test_levels(self):
        assert difficulty_level(2.9) == "easy"
        assert difficulty_level(3.0) == "medium"
        assert difficulty_level(5.99) == "medium"
        assert difficulty_level(6.0) == "hard"
        assert difficulty_level(10.0) == "hard"


# ============================================================
# Analysis
# ============================================================

class TestAnalyze:

    def test_box(self):
        a = analyzed("531")
        assert a.object_count == 3
        assert a.period == 3
        assert a.max_height == 5
        assert a.min_height == 1
        assert a.throw_sequence == [5, 3, 1]
        assert a.pattern_type == PatternType.ASYNC
        assert not a.has_multiplex
        assert not a.has_synchronous

    def test_invalid_returns_none(self):
        assert ANALYZER.analyze("123") is None
        assert ANALYZER.analyze("5,3") is None
        assert ANALYZER.analyze("") is None

    def test_sync_flags(self):
        a = analyzed("(4,4)")
        assert a.has_synchronous
        assert a.object_count == 4

    def test_to_dict(self):
        data = analyzed("441").to_dict()
        assert data["objectCount"] == 3
        assert data["maxHeight"] == 4
        assert data["throwSequence"] == [4, 4, 1]
        assert data["patternType"] == "async"


class TestDescribe:

    @pytest.mark.parametrize("pattern,expected", [
        ("3", "3-object cascade (easy)"),
        ("4", "4-object fountain (easy)"),
        ("531", "3-object cascade variation (easy)"),
        ("71", "4-object high throw pattern (medium)"),
        ("(4,4)", "4-object synchronous pattern (easy)"),
    ])
    def test_describe(self, pattern, expected):
        assert ANALYZER.describe(pattern, analyzed(pattern)) == expected

    def test_tags_box(self):
        assert ANALYZER.tags("531", analyzed("531")) == ["3-ball", "async", "beginner", "shower"]

    def test_tags_columns(self):
        assert ANALYZER.tags("423", analyzed("423")) == ["3-ball", "async", "beginner", "columns"]

    def test_tags_cascade(self):
        assert "cascade" in ANALYZER.tags("3", analyzed("3"))

    def test_tags_gaps(self):
        tags = ANALYZER.tags("60", analyzed("60"))
        assert "gaps" in tags
        assert "3-ball" in tags
