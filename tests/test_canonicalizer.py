import pytest
from juggleforge.canonicalizer import (
    canonicalize, canonicalize_sequence, canonical_rotation, reduce_repetition,
    rotations, are_equivalent, CONSTANT, CYCLIC, ALREADY_CANONICAL,
)
from juggleforge.parser import EmptyPatternError, SiteswapSyntaxError
from juggleforge.sequence import ThrowSequence
from juggleforge.catalog import CLASSIC_PATTERNS

CLASSICS = sorted({p for patterns in CLASSIC_PATTERNS.values() for p in patterns})


class TestCanonicalize:

    def test_rotation_to_highest_throw(self):
        form = canonicalize("315")
        assert form.canonical == "531"
        assert not form.is_already_canonical
        assert form.normalization_type == CYCLIC
        assert form.equivalent_forms == ["153", "315", "531"]

    def test_already_canonical_cycle(self):
        form = canonicalize("531")
        assert form.canonical == "531"
        assert form.is_already_canonical

    def test_burkes_barrage(self):
        assert canonicalize("342").canonical == "423"
        assert canonicalize("234").canonical == "423"

    def test_constant(self):
        form = canonicalize("333")
        assert form.canonical == "3"
        assert form.normalization_type == CONSTANT
        assert not form.is_already_canonical
        assert form.equivalent_forms == ["3"]

    def test_single_throw(self):
        form = canonicalize("3")
        assert form.canonical == "3"
        assert form.is_already_canonical
        assert form.normalization_type == ALREADY_CANONICAL

    def test_repetition_collapsed(self):
        form = canonicalize("531531")
        assert form.canonical == "531"
        assert not form.is_already_canonical

    def test_whitespace_ignored(self):
        form = canonicalize("  5 3 1 ")
        assert form.canonical == "531"
        assert form.is_already_canonical

    def test_sync_passes_through(self):
        form = canonicalize("(4, 4)")
        assert form.canonical == "(4,4)"
        assert form.is_already_canonical
        assert form.normalization_type == ALREADY_CANONICAL

    def test_multiplex_passes_through(self):
        assert canonicalize("[33]").canonical == "[33]"

    def test_invalid_pattern_still_canonicalized(self):
        assert canonicalize("312").canonical == "312"
        assert canonicalize("231").canonical == "312"

    def test_empty_raises(self):
        with pytest.raises(EmptyPatternError):
            canonicalize("")

    def test_syntax_error_raises(self):
        with pytest.raises(SiteswapSyntaxError):
            canonicalize("5,3")

    def test_to_dict(self):
        data = canonicalize("315").to_dict()
        assert data == {
            "canonical": "531",
            "isAlreadyCanonical": False,
            "equivalentForms": ["153", "315", "531"],
            "normalizationType": "cyclic",
        }


class TestHelpers:

    def test_reduce_repetition(self):
        assert reduce_repetition((4, 4, 1, 4, 4, 1)) == (4, 4, 1)
        assert reduce_repetition((5, 3, 1)) == (5, 3, 1)
        assert reduce_repetition((3, 3, 3, 3)) == (3,)

    def test_rotations(self):
        assert rotations((5, 3, 1)) == [(5, 3, 1), (3, 1, 5), (1, 5, 3)]
        assert rotations(()) == []

    def test_tie_break_prefers_largest_sequence(self):
        assert canonical_rotation((5, 1, 2, 5, 2)) == (5, 2, 5, 1, 2)

    def test_canonicalize_sequence(self):
        assert canonicalize_sequence((1, 4, 4)) == ThrowSequence([4, 4, 1])
        assert canonicalize_sequence((3, 3)) == ThrowSequence([3])

    def test_are_equivalent(self):
        assert are_equivalent("315", "153")
        assert are_equivalent("531531", "531")
        assert not are_equivalent("531", "441")

    def test_idempotent(self):
        for pattern in ["315", "342", "441", "97531", "b97531"]:
            once = canonicalize(pattern).canonical
            assert canonicalize(once).canonical == once
            assert canonicalize(once).is_already_canonical


class TestEquivalenceClasses:

    @pytest.mark.parametrize("pattern", CLASSICS)
    def test_every_rotation_shares_canonical(self, pattern):
        canonical = canonicalize(pattern).canonical
        seq = ThrowSequence.from_string(pattern)
        for k in range(len(seq)):
            rotated = seq.rotate(k).to_string()
            assert canonicalize(rotated).canonical == canonical, (pattern, k)

    @pytest.mark.parametrize("pattern", CLASSICS)
    @pytest.mark.parametrize("repeats", [2, 3])
    def test_repetition_collapses(self, pattern, repeats):
        canonical = canonicalize(pattern).canonical
        form = canonicalize(pattern * repeats)
        assert form.canonical == canonical
        assert not form.is_already_canonical
