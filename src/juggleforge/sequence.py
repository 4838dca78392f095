"""
ThrowSequence: one period of a siteswap as an immutable run of throw heights.

Beat i is thrown by hand i % 2. A sequence is never mutated after creation;
rotate() and friends return new sequences.
"""

from enum import Enum

from . import config
from .tokenizer import TOKENIZER


class PatternType(str, Enum):
    ASYNC = "async"
    SYNC = "sync"
    MULTIPLEX = "multiplex"
    INVALID = "invalid"


class ThrowSequence:
    __slots__ = ('_throws',)

    def __init__(self, throws):
        values = tuple(int(t) for t in throws)
        for t in values:
            if t < 0 or t > config.MAX_THROW:
                raise ValueError(f"Throw height {t} outside 0..{config.MAX_THROW}")
        self._throws = values

    @classmethod
    def from_string(cls, text):
        return cls(TOKENIZER.encode(text))

    @property
    def throws(self):
        return self._throws

    @property
    def period(self):
        return len(self._throws)

    @property
    def total(self):
        return sum(self._throws)

    def rotate(self, k):
        """Cyclic left shift by k beats."""
        if not self._throws:
            return self
        k %= len(self._throws)
        return ThrowSequence(self._throws[k:] + self._throws[:k])

    def to_string(self):
        return TOKENIZER.decode(self._throws)

    # ---- Python protocol ----

    def __len__(self):
        return len(self._throws)

    def __iter__(self):
        return iter(self._throws)

    def __getitem__(self, idx):
        return self._throws[idx]

    def __eq__(self, other):
        if isinstance(other, ThrowSequence):
            return self._throws == other._throws
        return NotImplemented

    def __hash__(self):
        return hash(self._throws)

    def __repr__(self):
        return f"ThrowSequence({list(self._throws)})"

    # ---- Serialization ----

    def to_dict(self):
        return {'throws': list(self._throws), 'period': self.period}

    @classmethod
    def from_dict(cls, data):
        return cls(data['throws'])


class ParsedPattern:
    """Parser output: pattern type, flattened throws and the cleaned text."""
    __slots__ = ('pattern_type', 'throws', 'normalized')

    def __init__(self, pattern_type, throws, normalized):
        self.pattern_type = pattern_type
        self.throws = throws
        self.normalized = normalized

    @property
    def has_multiplex(self):
        return self.pattern_type == PatternType.MULTIPLEX or '[' in self.normalized

    @property
    def has_synchronous(self):
        return self.pattern_type == PatternType.SYNC or '(' in self.normalized

    def __repr__(self):
        return f"ParsedPattern({self.pattern_type.value}, {self.normalized!r})"
