"""
SiteswapGenerator: synthesizes valid siteswaps for a target object count.

Two modes:
  - generate():           bounded depth-first search, first hit wins
  - enumerate_patterns(): exhaustive enumeration for short periods

Both return canonical strings only. Running out of search space is not an
error: generate() returns None and callers fall back to curated patterns.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from . import config
from .canonicalizer import canonicalize_sequence
from .validator import VALIDATOR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorConstraints:
    min_height: int = 0
    max_height: int = 6
    include_zeros: bool = False
    max_attempts: int = config.DEFAULT_MAX_ATTEMPTS

    def __post_init__(self):
        if self.min_height < 0 or self.max_height < 0:
            raise ValueError("Throw heights must be non-negative")
        if self.max_height > config.MAX_THROW:
            raise ValueError(f"max_height {self.max_height} exceeds {config.MAX_THROW}")
        if self.min_height > self.max_height:
            raise ValueError(
                f"min_height {self.min_height} is greater than max_height {self.max_height}"
            )
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    @classmethod
    def for_objects(cls, object_count, **overrides):
        """Defaults used by the app: heights 0..2n, no gaps."""
        overrides.setdefault(
            "max_height", default_max_height(object_count, overrides.get("min_height", 0))
        )
        return cls(**overrides)

    @property
    def lowest(self):
        """Smallest height actually allowed."""
        if self.min_height == 0 and not self.include_zeros:
            return 1
        return self.min_height


def default_max_height(object_count, min_height=0):
    """2n capped at the alphabet, raised to min_height when that is higher."""
    return max(min(object_count * 2, config.MAX_THROW), min_height)


def height_bounds(target, total, remaining, lowest, highest) -> Tuple[int, int]:
    """
    Range for the next throw such that the remaining throws can still reach
    the target sum. Empty when lo > hi.
    """
    lo = max(lowest, target - total - (remaining - 1) * highest)
    hi = min(highest, target - total - (remaining - 1) * lowest)
    return lo, hi


def accept(throws) -> Optional[str]:
    """Canonical string for a complete candidate, or None if it fails validation."""
    if not VALIDATOR.is_valid_sequence(throws) or VALIDATOR.check_state(throws):
        return None
    canonical = canonicalize_sequence(throws)
    if not VALIDATOR.validate(canonical).is_valid:
        return None
    return canonical.to_string()


class SiteswapGenerator:

    def __init__(self, max_search_steps=config.MAX_SEARCH_STEPS):
        self.max_search_steps = max_search_steps

    # ------------------------------------------------------------------ #
    #  Search                                                              #
    # ------------------------------------------------------------------ #

    def generate(self, object_count, length, constraints=None, rng=None) -> Optional[str]:
        """
        Return one canonical pattern with the given object count and period,
        or None when no attempt finds one.

        Without an rng the first attempt walks heights in ascending order, so
        results are reproducible; passing an rng shuffles every attempt.
        """
        self._check_args(object_count, length)
        constraints = constraints or GeneratorConstraints.for_objects(object_count)
        ordered_first = rng is None
        rng = rng or random.Random()

        for attempt in range(constraints.max_attempts):
            order = None if ordered_first and attempt == 0 else rng
            found, exhausted = self._search(object_count, length, constraints, order)
            if found is not None:
                logger.debug("Generated %s (objects=%d, length=%d, attempt=%d)",
                             found, object_count, length, attempt)
                return found
            if exhausted:
                break

        logger.debug("No pattern for objects=%d length=%d within %s",
                     object_count, length, constraints)
        return None

    def _search(self, object_count, length, constraints, rng):
        """
        Depth-first search over immutable prefixes on an explicit stack.
        Returns (pattern or None, whether the whole tree was explored).
        """
        target = object_count * length
        lowest, highest = constraints.lowest, constraints.max_height
        stack = [((), 0)]
        steps = 0

        while stack:
            prefix, total = stack.pop()
            remaining = length - len(prefix)
            if remaining == 0:
                if total == target:
                    found = accept(prefix)
                    if found is not None:
                        return found, False
                continue

            steps += 1
            if steps > self.max_search_steps:
                return None, False

            lo, hi = height_bounds(target, total, remaining, lowest, highest)
            if lo > hi:
                continue
            heights = list(range(lo, hi + 1))
            if rng is not None:
                rng.shuffle(heights)
            for h in reversed(heights):
                stack.append((prefix + (h,), total + h))

        return None, True

    # ------------------------------------------------------------------ #
    #  Enumeration                                                         #
    # ------------------------------------------------------------------ #

    def enumerate_patterns(self, object_count, length, constraints=None,
                           max_results=config.MAX_PATTERNS_PER_LENGTH) -> List[str]:
        """
        All distinct canonical patterns for a short period, in discovery order,
        capped at max_results.
        """
        self._check_args(object_count, length)
        if length > config.MAX_ENUMERATION_LENGTH:
            raise ValueError(
                f"Exhaustive enumeration is limited to length <= {config.MAX_ENUMERATION_LENGTH}"
            )
        constraints = constraints or GeneratorConstraints.for_objects(object_count)

        found = []
        seen = set()
        for combination in self.combinations(object_count * length, length, constraints):
            canonical = accept(combination)
            if canonical is None or canonical in seen:
                continue
            seen.add(canonical)
            found.append(canonical)
            if len(found) >= max_results:
                break
        return found

    def combinations(self, target, length, constraints) -> Iterator[Tuple[int, ...]]:
        """Every height tuple of the given length summing to target, capped."""
        lowest, highest = constraints.lowest, constraints.max_height
        emitted = 0

        def walk(prefix, total):
            nonlocal emitted
            remaining = length - len(prefix)
            if remaining == 0:
                if total == target:
                    emitted += 1
                    yield prefix
                return
            lo, hi = height_bounds(target, total, remaining, lowest, highest)
            for h in range(lo, hi + 1):
                if emitted >= config.MAX_COMBINATIONS:
                    return
                yield from walk(prefix + (h,), total + h)

        yield from walk((), 0)

    @staticmethod
    def _check_args(object_count, length):
        if object_count < 0:
            raise ValueError("object_count must be non-negative")
        if length < 1:
            raise ValueError("length must be at least 1")


GENERATOR = SiteswapGenerator()
