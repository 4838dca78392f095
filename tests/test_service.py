import inspect
import math
import random
import pytest
from juggleforge.service import SiteswapService, validate, analyze, normalize, generate
from juggleforge.parser import SiteswapSyntaxError
from juggleforge import config

SERVICE = SiteswapService()


class TestValidate:

    def test_valid_pattern_gets_canonical_info(self):
        result = SERVICE.validate("315")
        assert result.is_valid
        assert result.object_count == 3
        assert result.canonical_form == "531"
        assert result.is_canonical is False
        assert result.equivalent_forms == ["153", "315", "531"]

    def test_difficulty_attached(self):
        result = SERVICE.validate("531")
        expected = 0.4 * 3 + 0.3 * (8 / 3) + 0.2 * math.log(4)
        assert result.difficulty == pytest.approx(expected)
        assert result.is_canonical is True

    def test_invalid_pattern_has_no_canonical_info(self):
        result = SERVICE.validate("123")
        assert not result.is_valid
        assert result.canonical_form is None
        assert result.difficulty is None

    def test_empty(self):
        result = SERVICE.validate("")
        assert result.diagnostics[0].error_type == "empty"

    def test_to_dict(self):
        data = SERVICE.validate("315").to_dict()
        assert data["canonicalForm"] == "531"
        assert data["isCanonical"] is False
        assert data["equivalentForms"] == ["153", "315", "531"]


class TestQueries:

    def test_normalize(self):
        assert SERVICE.normalize("342").canonical == "423"
        with pytest.raises(SiteswapSyntaxError):
            SERVICE.normalize("5,3")

    def test_is_canonical(self):
        assert SERVICE.is_canonical("531")
        assert not SERVICE.is_canonical("315")
        assert not SERVICE.is_canonical("5,3")

    def test_equivalent_forms(self):
        assert SERVICE.equivalent_forms("441") == ["144", "414", "441"]
        assert SERVICE.equivalent_forms("5,3") == []

    def test_object_count(self):
        assert SERVICE.object_count("531") == 3
        assert SERVICE.object_count("123") == 0

    def test_are_equivalent(self):
        assert SERVICE.are_equivalent("315", "531")
        assert not SERVICE.are_equivalent("531", "441")
        assert not SERVICE.are_equivalent("123", "123")

    def test_analyze(self):
        assert SERVICE.analyze("531").max_height == 5
        assert SERVICE.analyze("123") is None


class TestSuggestion:

    def test_named(self):
        assert SERVICE.canonical_suggestion("315") == "Did you mean '531' (Box)?"
        assert SERVICE.canonical_suggestion("342") == "Did you mean '423' (Burke's Barrage)?"

    def test_unnamed(self):
        assert SERVICE.canonical_suggestion("26") == "Did you mean '62'?"

    def test_no_suggestion(self):
        assert SERVICE.canonical_suggestion("531") is None
        assert SERVICE.canonical_suggestion("123") is None


class TestGenerate:

    def test_default_height_limit(self):
        assert SERVICE.generate(3, 3) == "441"

    def test_explicit_limits(self):
        assert SERVICE.generate(3, 3, max_height=6) == "441"
        assert SERVICE.generate(3, 2, max_height=2) is None

    def test_with_rng(self):
        pattern = SERVICE.generate(5, 3, rng=random.Random(11))
        assert SERVICE.validate(pattern).object_count == 5

    def test_min_height_only_with_empty_range(self):
        assert SERVICE.generate(2, 3, min_height=5) is None

    def test_default_attempts_come_from_config(self):
        default = inspect.signature(SERVICE.generate).parameters["max_attempts"].default
        assert default == config.DEFAULT_MAX_ATTEMPTS

    def test_bad_constraints(self):
        with pytest.raises(ValueError):
            SERVICE.generate(3, 3, min_height=5, max_height=4)


def test_module_functions():
    assert validate("531").is_valid
    assert analyze("441").object_count == 3
    assert normalize("153").canonical == "531"
    assert generate(3, 1) == "3"
