"""
SiteswapValidator: checks the mathematical invariants of a throw sequence.

Checks (all run, all diagnostics collected):
  - average theorem:  sum / period must be an integer (the object count)
  - collisions:       no two throws land on the same (beat, hand) slot
  - state return:     per-hand object counts return to their start multiset
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from . import config
from .parser import PARSER, SiteswapSyntaxError
from .sequence import PatternType, ThrowSequence

logger = logging.getLogger(__name__)


class Diagnostic:
    def __init__(self, error_type, message, beats=(), details=None):
        self.error_type = error_type    # 'empty', 'syntax', 'average', 'collision', 'state'
        self.message = message
        self.beats = tuple(beats)
        self.details = details or {}

    def __str__(self):
        return self.message

    def __repr__(self):
        return f"[{self.error_type.upper()}] {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list = field(default_factory=list)
    diagnostics: list = field(default_factory=list)
    pattern_type: PatternType = PatternType.INVALID
    object_count: Optional[int] = None
    period: Optional[int] = None
    average_height: Optional[float] = None
    variance: Optional[float] = None
    difficulty: Optional[float] = None
    canonical_form: Optional[str] = None
    is_canonical: Optional[bool] = None
    equivalent_forms: Optional[list] = None

    @classmethod
    def failure(cls, diagnostics, pattern_type=PatternType.INVALID):
        return cls(
            is_valid=False,
            errors=[d.message for d in diagnostics],
            diagnostics=list(diagnostics),
            pattern_type=pattern_type,
        )

    def to_dict(self):
        data = {
            'isValid': self.is_valid,
            'errors': list(self.errors),
            'patternType': self.pattern_type.value,
        }
        optional = {
            'objectCount': self.object_count,
            'period': self.period,
            'averageHeight': self.average_height,
            'variance': self.variance,
            'difficulty': self.difficulty,
            'canonicalForm': self.canonical_form,
            'isCanonical': self.is_canonical,
            'equivalentForms': self.equivalent_forms,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data


def landing_slot(beat, height, period):
    """(landing beat within the period, landing hand) for a throw."""
    hand = beat % config.HAND_COUNT
    return (beat + height) % period, (hand + height) % config.HAND_COUNT


def population_variance(throws):
    if len(throws) == 0:
        return 0.0
    return float(np.var(np.asarray(throws, dtype=float)))


class SiteswapValidator:

    def validate(self, throws, pattern_type=PatternType.ASYNC):
        """Run all checks. Returns a ValidationResult."""
        throws = throws if isinstance(throws, ThrowSequence) else ThrowSequence(throws)
        if len(throws) == 0:
            return ValidationResult.failure(
                [Diagnostic('empty', 'No valid throws found in pattern')], pattern_type
            )

        diagnostics = []
        diagnostics.extend(self.check_average(throws))
        diagnostics.extend(self.check_collisions(throws))
        diagnostics.extend(self.check_state(throws))

        if diagnostics:
            logger.debug("Rejected %s: %s", throws, [d.message for d in diagnostics])
            return ValidationResult.failure(diagnostics, pattern_type)

        object_count = throws.total // throws.period
        return ValidationResult(
            is_valid=True,
            pattern_type=pattern_type,
            object_count=object_count,
            period=throws.period,
            average_height=float(object_count),
            variance=population_variance(throws.throws),
        )

    def validate_pattern(self, text):
        """Parse then validate. Syntax problems come back as diagnostics."""
        try:
            parsed = PARSER.parse(text)
        except SiteswapSyntaxError as e:
            return ValidationResult.failure([Diagnostic(e.error_type, str(e))])
        return self.validate(parsed.throws, parsed.pattern_type)

    # ------------------------------------------------------------------ #
    #  Individual checks                                                   #
    # ------------------------------------------------------------------ #

    def check_average(self, throws):
        total, period = sum(throws), len(throws)
        if total % period == 0:
            return []
        average = total / period
        return [Diagnostic(
            'average',
            f'Pattern average {average:.2f} is not an integer (violates average theorem)',
            details={'sum': total, 'period': period, 'average': average},
        )]

    def check_collisions(self, throws):
        """Every non-zero throw claims one (beat, hand) landing slot per period."""
        errors = []
        period = len(throws)
        occupied = {}
        for beat, height in enumerate(throws):
            if height == 0:
                continue
            slot = landing_slot(beat, height, period)
            if slot in occupied:
                other = occupied[slot]
                errors.append(Diagnostic(
                    'collision',
                    f'Collision at beat {slot[0]}, hand {slot[1]}: throw {height} '
                    f'from beat {beat} conflicts with throw {throws[other]} from beat {other}',
                    beats=(other, beat),
                    details={'landing_beat': slot[0], 'landing_hand': slot[1]},
                ))
                continue
            occupied[slot] = beat
        return errors

    def check_state(self, throws):
        """
        Each hand starts holding the objects it throws during the period.
        After one cycle (thrower -1, catcher +1) the multiset of per-hand
        counts must match the starting multiset.
        """
        start = [0] * config.HAND_COUNT
        for beat, height in enumerate(throws):
            if height:
                start[beat % config.HAND_COUNT] += 1

        state = list(start)
        for beat, height in enumerate(throws):
            if height == 0:
                continue
            state[beat % config.HAND_COUNT] -= 1
            state[(beat + height) % config.HAND_COUNT] += 1

        if Counter(state) == Counter(start):
            return []
        return [Diagnostic(
            'state',
            f'Pattern does not return to starting state: initial {start}, final {state}',
            details={'initial': start, 'final': state},
        )]

    # ------------------------------------------------------------------ #
    #  Fast path                                                           #
    # ------------------------------------------------------------------ #

    def is_valid_sequence(self, throws):
        """
        Average theorem + collision check only, no diagnostics.
        Optimisation for generation loops; not a replacement for validate().
        """
        period = len(throws)
        if period == 0 or sum(throws) % period:
            return False
        seen = set()
        for beat, height in enumerate(throws):
            if height == 0:
                continue
            slot = landing_slot(beat, height, period)
            if slot in seen:
                return False
            seen.add(slot)
        return True


VALIDATOR = SiteswapValidator()
