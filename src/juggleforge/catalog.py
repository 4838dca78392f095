"""
PatternCatalog: curated and generated pattern lists for browsing.

Pipeline per request:
  classic table -> generate per length -> enumerate short lengths
  -> analyze -> filter by options -> dedupe -> sort
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from . import config
from .analyzer import ANALYZER
from .generator import (
    GENERATOR, GeneratorConstraints, SiteswapGenerator, default_max_height,
)
from .sequence import PatternType
from .store import GenerationCache

logger = logging.getLogger(__name__)

CLASSIC_PATTERNS: Dict[int, List[str]] = {
    3: ["3", "423", "441", "531", "522", "51", "42", "60"],
    4: ["4", "534", "552", "71", "62", "53", "633", "642"],
    5: ["5", "645", "663", "744", "753", "97531", "91", "82"],
    6: ["6", "756", "774", "855", "864", "97", "88", "79"],
    7: ["7", "867", "885", "966", "975", "b97531", "99", "9a"],
}

PATTERN_FAMILIES = {
    "flash":    ("All objects thrown and caught once", ["3", "4", "5"]),
    "cascade":  ("Alternating hand throws", ["3", "5", "7"]),
    "fountain": ("Same-hand throws", ["4", "6", "8"]),
    "shower":   ("Circular throwing pattern", ["51", "71", "91"]),
    "columns":  ("Vertical throwing patterns", ["423", "534", "645"]),
    "mills":    ("Mills mess family", ["441", "552", "663"]),
    "box":      ("Box pattern family", ["(4,2x)(2x,4)", "(6,2x)(2x,6)"]),
}

PROGRESSIONS = {
    "beginner":     ["3", "423", "441", "531"],
    "intermediate": ["4", "534", "552", "633", "642"],
    "advanced":     ["5", "645", "663", "744", "753", "97531"],
}


@dataclass(frozen=True)
class GeneratedPattern:
    pattern: str
    object_count: int
    period: int
    difficulty: float
    average_height: float
    pattern_type: PatternType
    description: str
    tags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PatternCategory:
    name: str
    description: str
    patterns: List[GeneratedPattern]


class PatternCatalog:

    def __init__(self, generator: Optional[SiteswapGenerator] = None,
                 cache: Optional[GenerationCache] = None):
        self.generator = generator or GENERATOR
        self.cache = cache

    def analyze_pattern(self, pattern: str) -> Optional[GeneratedPattern]:
        analysis = ANALYZER.analyze(pattern)
        if analysis is None:
            return None
        return GeneratedPattern(
            pattern=pattern,
            object_count=analysis.object_count,
            period=analysis.period,
            difficulty=analysis.difficulty,
            average_height=analysis.average_height,
            pattern_type=analysis.pattern_type,
            description=ANALYZER.describe(pattern, analysis),
            tags=ANALYZER.tags(pattern, analysis),
        )

    def generate_patterns(self, object_count, pattern_length=6, min_height=0,
                          max_height=None, include_zeros=False,
                          difficulty="any", pattern_type="any") -> List[GeneratedPattern]:
        """Classic patterns first, then generated ones, filtered and sorted."""
        if difficulty != "any" and difficulty not in config.DIFFICULTY_BANDS:
            raise ValueError(f"Unknown difficulty '{difficulty}'")
        if max_height is None:
            max_height = default_max_height(object_count, min_height)

        key = ("patterns", object_count, pattern_length, min_height, max_height,
               include_zeros, difficulty, pattern_type)
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                return list(cached)

        options = dict(include_zeros=include_zeros, difficulty=difficulty,
                       pattern_type=pattern_type)
        candidates = list(CLASSIC_PATTERNS.get(object_count, []))
        constraints = GeneratorConstraints(min_height, max_height, include_zeros, max_attempts=10)
        for length in range(1, pattern_length + 1):
            candidates.extend(self._patterns_for_length(object_count, length, constraints))

        patterns = []
        seen = set()
        for candidate in candidates:
            if candidate in seen:
                continue
            seen.add(candidate)
            analyzed = self.analyze_pattern(candidate)
            if analyzed is not None and self._matches(analyzed, **options):
                patterns.append(analyzed)

        patterns.sort(key=lambda p: (p.difficulty, p.period))
        if self.cache is not None:
            self.cache.set(key, tuple(patterns))
        return patterns

    def random_pattern(self, object_count, max_length=6, rng=None) -> Optional[GeneratedPattern]:
        """Random generated pattern; falls back to the classic table."""
        rng = rng or random.Random()
        length = rng.randint(1, max_length)
        constraints = GeneratorConstraints.for_objects(
            object_count, include_zeros=True, max_attempts=100,
        )
        pattern = self.generator.generate(object_count, length, constraints, rng=rng)
        if pattern is not None:
            return self.analyze_pattern(pattern)

        classics = CLASSIC_PATTERNS.get(object_count, [])
        if not classics:
            return None
        logger.info("Falling back to classic patterns for %d objects", object_count)
        return self.analyze_pattern(rng.choice(classics))

    def categories(self) -> List[PatternCategory]:
        categories = [
            PatternCategory("Beginner Patterns", "Easy patterns for learning basic siteswap",
                            self.generate_patterns(3, pattern_length=3, difficulty="easy")),
            PatternCategory("Intermediate Patterns", "Medium difficulty patterns for skill development",
                            self.generate_patterns(4, pattern_length=3, difficulty="medium")),
            PatternCategory("Advanced Patterns", "Complex patterns for experienced jugglers",
                            self.generate_patterns(5, pattern_length=3, difficulty="hard")),
        ]
        for family, (description, examples) in PATTERN_FAMILIES.items():
            analyzed = [self.analyze_pattern(p) for p in examples]
            categories.append(PatternCategory(
                f"{family.capitalize()} Family", description,
                [p for p in analyzed if p is not None],
            ))
        return categories

    def progression_suggestions(self, current_patterns) -> List[GeneratedPattern]:
        level = self.skill_level(current_patterns)
        suggestions = [self.analyze_pattern(p) for p in PROGRESSIONS[level]]
        return [p for p in suggestions if p is not None]

    @staticmethod
    def skill_level(patterns) -> str:
        counts = [a.object_count for a in map(ANALYZER.analyze, patterns) if a is not None]
        top = max(counts, default=0)
        if top >= 5:
            return "advanced"
        if top >= 4:
            return "intermediate"
        return "beginner"

    # ------------------------------------------------------------------ #
    #  Internal                                                            #
    # ------------------------------------------------------------------ #

    def _patterns_for_length(self, object_count, length, constraints) -> List[str]:
        found = []
        stale = 0
        rng = random.Random(object_count * 1000 + length)
        for _ in range(config.MAX_PATTERNS_PER_LENGTH * 5):
            if len(found) >= config.MAX_PATTERNS_PER_LENGTH or stale >= 10:
                break
            pattern = self.generator.generate(object_count, length, constraints, rng=rng)
            if pattern is None:
                break
            if pattern in found:
                stale += 1
                continue
            stale = 0
            found.append(pattern)

        if len(found) < 5 and length <= config.MAX_ENUMERATION_LENGTH:
            for pattern in self.generator.enumerate_patterns(object_count, length, constraints):
                if pattern not in found:
                    found.append(pattern)
        return found

    @staticmethod
    def _matches(pattern, include_zeros, difficulty, pattern_type) -> bool:
        if pattern_type != "any" and pattern.pattern_type.value != pattern_type:
            return False
        if difficulty != "any":
            low, high = config.DIFFICULTY_BANDS[difficulty]
            # The top band is closed at 10.
            upper_ok = pattern.difficulty < high or (
                high == config.DIFFICULTY_MAX and pattern.difficulty <= high
            )
            if pattern.difficulty < low or not upper_ok:
                return False
        if not include_zeros and "0" in pattern.pattern:
            return False
        return True
