"""
SiteswapService: the entry point the application talks to.

Usage:
    service = SiteswapService()
    result = service.validate("315")
    result.is_valid          # True
    result.canonical_form    # "531"
"""

from __future__ import annotations

import dataclasses
from typing import List, Optional

from . import config
from .analyzer import ANALYZER, PatternAnalysis, difficulty_score
from .canonicalizer import CanonicalForm, canonicalize
from .generator import GENERATOR, GeneratorConstraints, SiteswapGenerator
from .naming import lookup_name
from .parser import PARSER, SiteswapSyntaxError
from .validator import VALIDATOR, Diagnostic, ValidationResult


class SiteswapService:

    def __init__(self, generator: Optional[SiteswapGenerator] = None):
        self.generator = generator or GENERATOR

    def validate(self, pattern: str) -> ValidationResult:
        """Validate and, on success, attach difficulty and canonical info."""
        try:
            parsed = PARSER.parse(pattern)
        except SiteswapSyntaxError as e:
            return ValidationResult.failure([Diagnostic(e.error_type, str(e))])

        result = VALIDATOR.validate(parsed.throws, parsed.pattern_type)
        if not result.is_valid:
            return result

        form = canonicalize(pattern)
        return dataclasses.replace(
            result,
            difficulty=difficulty_score(parsed.throws, parsed.pattern_type),
            canonical_form=form.canonical,
            is_canonical=form.is_already_canonical,
            equivalent_forms=list(form.equivalent_forms),
        )

    def analyze(self, pattern: str) -> Optional[PatternAnalysis]:
        return ANALYZER.analyze(pattern)

    def normalize(self, pattern: str) -> CanonicalForm:
        """Raises SiteswapSyntaxError for unparseable input."""
        return canonicalize(pattern)

    def is_canonical(self, pattern: str) -> bool:
        try:
            return canonicalize(pattern).is_already_canonical
        except SiteswapSyntaxError:
            return False

    def equivalent_forms(self, pattern: str) -> List[str]:
        try:
            return list(canonicalize(pattern).equivalent_forms)
        except SiteswapSyntaxError:
            return []

    def object_count(self, pattern: str) -> int:
        return self.validate(pattern).object_count or 0

    def are_equivalent(self, a: str, b: str) -> bool:
        """Both valid and sharing a canonical form."""
        first, second = self.validate(a), self.validate(b)
        return (first.is_valid and second.is_valid
                and first.canonical_form == second.canonical_form)

    def canonical_suggestion(self, pattern: str) -> Optional[str]:
        result = self.validate(pattern)
        if not result.is_valid or result.is_canonical:
            return None
        named = lookup_name(result.canonical_form)
        if named:
            return f"Did you mean '{result.canonical_form}' ({named[0]})?"
        return f"Did you mean '{result.canonical_form}'?"

    def generate(self, object_count: int, length: int, min_height: int = 0,
                 max_height: Optional[int] = None, include_zeros: bool = False,
                 max_attempts: int = config.DEFAULT_MAX_ATTEMPTS, rng=None) -> Optional[str]:
        if max_height is None:
            constraints = GeneratorConstraints.for_objects(
                object_count, min_height=min_height,
                include_zeros=include_zeros, max_attempts=max_attempts,
            )
        else:
            constraints = GeneratorConstraints(min_height, max_height, include_zeros, max_attempts)
        return self.generator.generate(object_count, length, constraints, rng=rng)


SERVICE = SiteswapService()


def validate(pattern):
    return SERVICE.validate(pattern)


def analyze(pattern):
    return SERVICE.analyze(pattern)


def normalize(pattern):
    return SERVICE.normalize(pattern)


def generate(object_count, length, **options):
    return SERVICE.generate(object_count, length, **options)
