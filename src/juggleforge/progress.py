"""
ProgressTracker: per-user practice progress stored as one JSON blob in a
KeyValueStore. Patterns are recorded under their canonical form, so
"315" and "531" count as the same trick.
"""

from __future__ import annotations

import datetime
import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

from . import config
from .canonicalizer import canonicalize
from .store import KeyValueStore, namespaced_key
from .validator import VALIDATOR

logger = logging.getLogger(__name__)

PROGRESS_KEY = "progress"


@dataclass
class ProgressData:
    completed_patterns: List[str] = field(default_factory=list)
    max_catches: Dict[str, int] = field(default_factory=dict)
    completion_dates: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data):
        return cls(
            completed_patterns=list(data.get("completed_patterns", [])),
            max_catches={k: int(v) for k, v in data.get("max_catches", {}).items()},
            completion_dates=dict(data.get("completion_dates", {})),
        )


def format_date(when: datetime.date) -> str:
    """M-D-YYYY, no zero padding."""
    return f"{when.month}-{when.day}-{when.year}"


def extract_repeating_base(pattern: str) -> str:
    for length in range(1, len(pattern) // 2 + 1):
        base = pattern[:length]
        if len(pattern) % length == 0 and base * (len(pattern) // length) == pattern:
            return base
    return pattern


def is_repeating_pattern(pattern: str) -> bool:
    return len(extract_repeating_base(pattern)) < len(pattern)


def related_repetitions(pattern: str, max_length=config.MAX_REPETITION_LENGTH) -> List[str]:
    """The base of a pattern repeated 1..max_length times."""
    base = extract_repeating_base(pattern)
    return [base * n for n in range(1, max_length + 1)]


class ProgressTracker:

    def __init__(self, store: KeyValueStore, user_id: str):
        self.store = store
        self.key = namespaced_key(user_id, PROGRESS_KEY)

    def load(self) -> ProgressData:
        raw = self.store.get(self.key)
        if raw is None:
            return ProgressData()
        try:
            return ProgressData.from_dict(json.loads(raw))
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("Discarding unreadable progress under %s: %s", self.key, e)
            return ProgressData()

    def save(self, data: ProgressData) -> None:
        self.store.set(self.key, json.dumps(asdict(data)))

    def reset(self) -> None:
        self.store.delete(self.key)

    def mark_completed(self, pattern: str, catches: Optional[int] = None,
                       when: Optional[datetime.date] = None) -> str:
        """Record a completed pattern. Returns the canonical form stored."""
        canonical = self._canonical(pattern)
        data = self.load()
        if canonical not in data.completed_patterns:
            data.completed_patterns.append(canonical)
            data.completion_dates[canonical] = format_date(when or datetime.date.today())
        if catches is not None:
            self._bump_catches(data, canonical, catches)
        self.save(data)
        return canonical

    def record_catches(self, pattern: str, catches: int) -> int:
        """Keep the best catch count for a pattern. Returns the stored maximum."""
        canonical = self._canonical(pattern)
        data = self.load()
        best = self._bump_catches(data, canonical, catches)
        self.save(data)
        return best

    def is_completed(self, pattern: str) -> bool:
        try:
            canonical = self._canonical(pattern)
        except ValueError:
            return False
        return canonical in self.load().completed_patterns

    # ------------------------------------------------------------------ #
    #  Internal                                                            #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _canonical(pattern):
        result = VALIDATOR.validate_pattern(pattern)
        if not result.is_valid:
            raise ValueError(f"Invalid pattern '{pattern}': " + "; ".join(result.errors))
        return canonicalize(pattern).canonical

    @staticmethod
    def _bump_catches(data, canonical, catches):
        if catches < 0:
            raise ValueError("catches must be non-negative")
        best = max(data.max_catches.get(canonical, 0), catches)
        data.max_catches[canonical] = best
        return best
