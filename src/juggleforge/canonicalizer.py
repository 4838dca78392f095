"""
Canonicalizer: maps every async siteswap onto one representative string so
that patterns equal under cyclic time-shift compare equal.

Rules:
1. Collapse exact repetition ("333333" -> "3", "531531" -> "531")
2. Constant patterns reduce to their single throw
3. Otherwise pick the rotation starting with the highest throw; ties go to
   the numerically largest remaining sequence ("highest throw first")

Sync and multiplex patterns are passed through untouched.
Unparseable input raises SiteswapSyntaxError.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from . import config
from .parser import PARSER
from .sequence import PatternType, ThrowSequence

logger = logging.getLogger(__name__)

CONSTANT = 'constant'
CYCLIC = 'cyclic'
ALREADY_CANONICAL = 'already-canonical'


@dataclass(frozen=True)
class CanonicalForm:
    canonical: str
    is_already_canonical: bool
    equivalent_forms: list
    normalization_type: str

    def to_dict(self):
        return {
            'canonical': self.canonical,
            'isAlreadyCanonical': self.is_already_canonical,
            'equivalentForms': list(self.equivalent_forms),
            'normalizationType': self.normalization_type,
        }


def reduce_repetition(throws):
    """Shortest prefix whose repetition rebuilds the whole sequence."""
    seq = tuple(throws)
    n = len(seq)
    for length in range(1, n // 2 + 1):
        if n % length == 0 and seq[:length] * (n // length) == seq:
            return seq[:length]
    return seq


def rotations(throws):
    seq = tuple(throws)
    return [seq[i:] + seq[:i] for i in range(len(seq))]


def canonical_rotation(throws):
    """
    Rotation starting with the maximum throw; among those, the one whose
    throws compare largest position by position.
    """
    candidates = rotations(throws)
    if not candidates:
        return ()
    peak = max(throws)
    return max(r for r in candidates if r[0] == peak)


def canonicalize_sequence(throws):
    """Canonical ThrowSequence for an async throw sequence."""
    reduced = reduce_repetition(throws)
    if len(set(reduced)) <= 1:
        return ThrowSequence(reduced[:1])
    return ThrowSequence(canonical_rotation(reduced))


def canonicalize(text):
    """
    Normalize a pattern string. Returns a CanonicalForm.

    Example:
        canonicalize("315").canonical == "531"
    """
    start = time.perf_counter()
    parsed = PARSER.parse(text)
    cleaned = parsed.normalized

    if parsed.pattern_type != PatternType.ASYNC:
        return CanonicalForm(cleaned, True, [cleaned], ALREADY_CANONICAL)

    if len(cleaned) == 1:
        return CanonicalForm(cleaned, True, [cleaned], ALREADY_CANONICAL)

    reduced = reduce_repetition(parsed.throws)
    if len(set(reduced)) == 1:
        canonical = ThrowSequence(reduced[:1]).to_string()
        result = CanonicalForm(canonical, cleaned == canonical, [canonical], CONSTANT)
    else:
        canonical = ThrowSequence(canonical_rotation(reduced)).to_string()
        forms = sorted({ThrowSequence(r).to_string() for r in rotations(reduced)})
        result = CanonicalForm(canonical, cleaned == canonical, forms, CYCLIC)

    elapsed_ms = (time.perf_counter() - start) * 1000
    if elapsed_ms > config.SLOW_CALL_MS:
        logger.warning(
            "Normalization took %.2fms (target: <%.0fms) for pattern: %s",
            elapsed_ms, config.SLOW_CALL_MS, text,
        )
    return result


def are_equivalent(a, b):
    """True when both strings parse and share a canonical form."""
    return canonicalize(a).canonical == canonicalize(b).canonical
