import pytest
from juggleforge.parser import (
    SiteswapParser, SiteswapSyntaxError, EmptyPatternError, InvalidSyntaxError, parse,
)
from juggleforge.sequence import PatternType

PARSER = SiteswapParser()


def test_parser_normalization():
    assert PARSER.normalize(" 5 3 1 ") == "531"
    assert PARSER.normalize("B97531") == "b97531"
    assert PARSER.normalize("531!?") == "531"
    assert PARSER.normalize("(4x, 2x)") == "(4x,2x)"

def test_parser_classify():
    assert PARSER.classify("531") == PatternType.ASYNC
    assert PARSER.classify("(4,4)") == PatternType.SYNC
    assert PARSER.classify("[33]") == PatternType.MULTIPLEX
    assert PARSER.classify("5,3") == PatternType.INVALID


class TestAsync:

    def test_simple(self):
        parsed = parse("531")
        assert parsed.pattern_type == PatternType.ASYNC
        assert parsed.throws.throws == (5, 3, 1)
        assert parsed.normalized == "531"

    def test_whitespace_and_junk_are_dropped(self):
        parsed = parse("  5 3 1! ")
        assert parsed.normalized == "531"
        assert parsed.throws.throws == (5, 3, 1)

    def test_letters(self):
        assert parse("B97531").throws.throws == (11, 9, 7, 5, 3, 1)

    def test_zero(self):
        assert parse("0").throws.throws == (0,)


class TestSync:

    def test_fountain(self):
        parsed = parse("(4,4)")
        assert parsed.pattern_type == PatternType.SYNC
        assert parsed.throws.throws == (4, 4)
        assert parsed.has_synchronous

    def test_crossing_markers_are_flattened(self):
        parsed = parse("(4x,2x)(2x,4x)")
        assert parsed.throws.throws == (4, 2, 2, 4)

    def test_three_throws_in_group_rejected(self):
        with pytest.raises(InvalidSyntaxError):
            parse("(4,4,4)")

    def test_unclosed_rejected(self):
        with pytest.raises(InvalidSyntaxError):
            parse("(4,4")

    def test_nested_rejected(self):
        with pytest.raises(InvalidSyntaxError):
            parse("((4,4))")


class TestMultiplex:

    def test_single_group(self):
        parsed = parse("[33]")
        assert parsed.pattern_type == PatternType.MULTIPLEX
        assert parsed.throws.throws == (3, 3)
        assert parsed.has_multiplex
        assert not parsed.has_synchronous

    def test_group_with_plain_throws(self):
        assert parse("[43]23").throws.throws == (4, 3, 2, 3)

    def test_empty_group_rejected(self):
        with pytest.raises(InvalidSyntaxError):
            parse("[]3")

    def test_comma_in_group_rejected(self):
        with pytest.raises(InvalidSyntaxError):
            parse("[3,3]")

    def test_unmatched_close_rejected(self):
        with pytest.raises(InvalidSyntaxError):
            parse("33]")


class TestErrors:

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty(self, text):
        with pytest.raises(EmptyPatternError):
            parse(text)

    def test_nothing_left_after_stripping(self):
        with pytest.raises(InvalidSyntaxError):
            parse("!!!")

    def test_comma_without_parentheses(self):
        with pytest.raises(InvalidSyntaxError):
            parse("5,3")

    def test_error_hierarchy(self):
        with pytest.raises(SiteswapSyntaxError):
            parse("5,3")
        with pytest.raises(ValueError):
            parse("")
        assert EmptyPatternError.error_type == "empty"
        assert InvalidSyntaxError.error_type == "syntax"
