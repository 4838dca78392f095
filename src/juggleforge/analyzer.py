"""
PatternAnalyzer: descriptive statistics for validated siteswaps.

Metrics:
  - object_count, period, average_height, variance
  - max_height / min_height
  - difficulty:  weighted heuristic clamped to [1, 10]
  - describe / tags: human-facing labels used by the catalog
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from . import config
from .parser import PARSER, SiteswapSyntaxError
from .sequence import PatternType
from .tokenizer import TOKENIZER
from .validator import VALIDATOR, population_variance


@dataclass(frozen=True)
class PatternAnalysis:
    object_count: int
    period: int
    difficulty: float
    average_height: float
    variance: float
    max_height: int
    min_height: int
    pattern_type: PatternType
    has_multiplex: bool
    has_synchronous: bool
    throw_sequence: List[int]

    def to_dict(self):
        return {
            'objectCount': self.object_count,
            'period': self.period,
            'difficulty': self.difficulty,
            'averageHeight': self.average_height,
            'variance': self.variance,
            'maxHeight': self.max_height,
            'minHeight': self.min_height,
            'patternType': self.pattern_type.value,
            'hasMultiplex': self.has_multiplex,
            'hasSynchronous': self.has_synchronous,
            'throwSequence': list(self.throw_sequence),
        }


def difficulty_score(throws, pattern_type=PatternType.ASYNC) -> float:
    """
    0.4*avg + 0.3*variance + 0.2*ln(period+1) + 0.1*bonus, clamped to [1, 10].
    The weights are presentation constants, see config.
    """
    if len(throws) == 0:
        return config.DIFFICULTY_MIN

    heights = np.asarray(list(throws), dtype=float)
    average = float(heights.mean())
    variance = population_variance(heights)

    bonus = 0.0
    if pattern_type == PatternType.SYNC:
        bonus += config.BONUS_SYNC
    if pattern_type == PatternType.MULTIPLEX:
        bonus += config.BONUS_MULTIPLEX
    if heights.max() >= config.HIGH_THROW:
        bonus += config.BONUS_HIGH
    if (heights == 0).any():
        bonus += config.BONUS_GAP

    total = (
        config.WEIGHT_HEIGHT * average
        + config.WEIGHT_VARIANCE * variance
        + config.WEIGHT_LENGTH * math.log(len(heights) + 1)
        + config.WEIGHT_SPECIAL * bonus
    )
    return min(max(total, config.DIFFICULTY_MIN), config.DIFFICULTY_MAX)


def _solo(n):
    """One-throw spelling of an n-object cascade or fountain."""
    return TOKENIZER.decode([n]) if 0 <= n <= config.MAX_THROW else None


def difficulty_level(difficulty: float) -> str:
    if difficulty < config.DIFFICULTY_BANDS["easy"][1]:
        return "easy"
    if difficulty < config.DIFFICULTY_BANDS["medium"][1]:
        return "medium"
    return "hard"


class PatternAnalyzer:

    def analyze(self, text: str) -> Optional[PatternAnalysis]:
        """Full analysis of a pattern string; None when it is not valid."""
        try:
            parsed = PARSER.parse(text)
        except SiteswapSyntaxError:
            return None

        result = VALIDATOR.validate(parsed.throws, parsed.pattern_type)
        if not result.is_valid:
            return None

        throws = list(parsed.throws)
        return PatternAnalysis(
            object_count=result.object_count,
            period=result.period,
            difficulty=difficulty_score(throws, parsed.pattern_type),
            average_height=result.average_height,
            variance=result.variance,
            max_height=max(throws),
            min_height=min(throws),
            pattern_type=parsed.pattern_type,
            has_multiplex=parsed.has_multiplex,
            has_synchronous=parsed.has_synchronous,
            throw_sequence=throws,
        )

    def describe(self, pattern: str, analysis: PatternAnalysis) -> str:
        """e.g. '3-object cascade (easy)'"""
        n = analysis.object_count
        if analysis.pattern_type == PatternType.ASYNC:
            if pattern == _solo(n):
                kind = "cascade" if n % 2 else "fountain"
            elif analysis.max_height > n + 2:
                kind = "high throw pattern"
            else:
                kind = "cascade variation"
        elif analysis.pattern_type == PatternType.SYNC:
            kind = "synchronous pattern"
        else:
            kind = "multiplex pattern"
        return f"{n}-object {kind} ({difficulty_level(analysis.difficulty)})"

    def tags(self, pattern: str, analysis: PatternAnalysis) -> List[str]:
        tags = [f"{analysis.object_count}-ball", analysis.pattern_type.value]
        tags.append({
            "easy": "beginner",
            "medium": "intermediate",
            "hard": "advanced",
        }[difficulty_level(analysis.difficulty)])

        if analysis.has_synchronous:
            tags.append("synchronous")
        if analysis.max_height > analysis.object_count + 3:
            tags.append("high-throws")
        if 0 in analysis.throw_sequence:
            tags.append("gaps")

        if pattern == _solo(analysis.object_count):
            tags.append("cascade")
        if analysis.pattern_type == PatternType.ASYNC and pattern.endswith("1"):
            tags.append("shower")
        if "42" in pattern:
            tags.append("columns")
        return tags


ANALYZER = PatternAnalyzer()
