"""
Human names for well-known siteswaps, keyed by canonical form.

Pure data plus lookups. Every lookup canonicalizes its input first, so
"315", "153" and "531531" all resolve to the Box entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .canonicalizer import canonicalize
from .parser import SiteswapSyntaxError

LOJ = "Library of Juggling"
EDGE = "The Juggling Edge"
JLAB = "JugglingLab Documentation"

RELATIONSHIPS = (
    "prerequisite", "variation", "progression", "mechanical_relative", "family_member",
)


@dataclass(frozen=True)
class PatternVariation:
    name: str
    siteswap: str
    sources: Tuple[str, ...]
    description: str = ""
    difficulty: Optional[int] = None


@dataclass(frozen=True)
class RelatedPattern:
    name: str
    siteswap: str
    relationship: str
    sources: Tuple[str, ...]
    description: str = ""


@dataclass(frozen=True)
class PatternFamily:
    primary_name: str
    alternative_names: Tuple[str, ...] = ()
    variations: Tuple[PatternVariation, ...] = ()
    related_patterns: Tuple[RelatedPattern, ...] = ()
    sources: Tuple[str, ...] = (LOJ,)
    historical_notes: str = ""
    inventor: Optional[str] = None
    difficulty: Optional[int] = None
    prerequisites: Tuple[str, ...] = field(default_factory=tuple)


# ------------------------------------------------------------------ #
#  Names                                                               #
# ------------------------------------------------------------------ #

AUTHENTIC_NAMES = {
    "3":            ("Cascade", (LOJ, EDGE, JLAB)),
    "441":          ("Half-Box", (LOJ,)),
    "531":          ("Box", (LOJ,)),
    "423":          ("Burke's Barrage", (LOJ,)),
    "51":           ("Shower", (LOJ,)),
    "4":            ("Fountain", (LOJ, EDGE, JLAB)),
    "5":            ("Cascade", (LOJ, EDGE, JLAB)),
    "(4,4)":        ("Synchronous Fountain", (EDGE, JLAB)),
    "(4,2x)(2x,4)": ("Box", (EDGE, LOJ)),
    "(4,4)(4,0)":   ("Columns", (EDGE, LOJ)),
    "[33]":         ("Multiplex Cascade", (EDGE, JLAB)),
}

# ------------------------------------------------------------------ #
#  Families                                                            #
# ------------------------------------------------------------------ #

PATTERN_FAMILIES = {
    "531": PatternFamily(
        primary_name="Box",
        alternative_names=("See-Saw",),
        variations=(
            PatternVariation("Box (Basic)", "(4,2x)(2x,4)", (LOJ,),
                             "Simultaneous vertical and horizontal throws, behaves like a see-saw", 6),
            PatternVariation("Broken Box", "(4,2x)*", (LOJ,),
                             "Both vertical throws made on the same side, forcing arm crossing", 6),
            PatternVariation("Extended Box", "(4x,2x)(4,2x)*", (LOJ,),
                             "Juggled on each side of the body by alternating the second throw", 6),
        ),
        related_patterns=(
            RelatedPattern("531 (Tower Pattern)", "531", "family_member", (LOJ,),
                           "Most basic tower pattern with descending height throws"),
            RelatedPattern("531 Mills Mess", "531", "variation", (LOJ,),
                           "Mills Mess done with the 531 siteswap"),
            RelatedPattern("Half-Box (441)", "441", "prerequisite", (LOJ,),
                           "Slower, easier version of the Box"),
            RelatedPattern("Shower", "51", "prerequisite", (LOJ,),
                           "Foundation pattern for learning Box"),
        ),
        historical_notes="Also known as the See-Saw due to its alternating vertical throws.",
        difficulty=6,
        prerequisites=("441 (Half-Box)", "Shower"),
    ),
    "441": PatternFamily(
        primary_name="Half-Box",
        alternative_names=("Parallel Schizophrenic",),
        variations=(
            PatternVariation("Half-Box (Basic)", "441", (LOJ,),
                             "First trick with a horizontal pass, a slower and easier Box", 4),
            PatternVariation("Reverse 441", "441", (LOJ,),
                             "Vertical throws made toward the centre of the body", 4),
        ),
        related_patterns=(
            RelatedPattern("Box", "531", "progression", (LOJ,),
                           "Faster relative of the Half-Box"),
            RelatedPattern("Cascade", "3", "prerequisite", (LOJ,),
                           "Basic three ball pattern"),
        ),
        difficulty=4,
        prerequisites=("Cascade",),
    ),
    "423": PatternFamily(
        primary_name="Burke's Barrage",
        variations=(
            PatternVariation("423 (Basic)", "423", (LOJ,),
                             "Alternating Two-in-ones from each hand", 2),
            PatternVariation("Takeouts", "423", (LOJ,),
                             "Large arm orbits while a ball is thrown back and forth in the centre", 4),
            PatternVariation("Relf's Revenge", "423", (LOJ,),
                             "Fast orbits added to the basic 423", 5),
        ),
        related_patterns=(
            RelatedPattern("Weave", "432", "progression", (LOJ,),
                           "A ball is carried through the pattern by the idle hand"),
            RelatedPattern("Two in One", "40", "prerequisite", (LOJ,),
                           "Foundation pattern for learning 423 variations"),
            RelatedPattern("Mills Mess", "3", "mechanical_relative", (LOJ,),
                           "Related through arm crossing movements"),
        ),
        sources=(LOJ, "Wikipedia"),
        historical_notes="Named after its inventor, Ken Burke.",
        inventor="Ken Burke",
        difficulty=4,
        prerequisites=("Takeouts",),
    ),
    "4": PatternFamily(
        primary_name="Fountain",
        alternative_names=("Asynchronous Fountain",),
        variations=(
            PatternVariation("Fountain (Basic)", "4", (LOJ,),
                             "Pair of Two-in-ones juggled asynchronously", 7),
            PatternVariation("Synchronous Fountain", "(4,4)", (LOJ,),
                             "Fountain with simultaneous throws", 6),
        ),
        related_patterns=(
            RelatedPattern("Two in One", "40", "prerequisite", (LOJ,),
                           "Foundation pattern for learning Fountain"),
            RelatedPattern("Half-Box (441)", "441", "prerequisite", (LOJ,),
                           "Helpful preparation pattern"),
            RelatedPattern("Four Ball Box", "(4,4)(4,0)", "family_member", (LOJ,),
                           "Four ball version of the Box"),
        ),
        historical_notes="Usually the first four ball pattern jugglers learn.",
        difficulty=7,
        prerequisites=("Two in One", "441 (Half-Box)"),
    ),
}


def _key(pattern) -> Optional[str]:
    try:
        return canonicalize(pattern).canonical
    except SiteswapSyntaxError:
        return None


def lookup_name(pattern) -> Optional[Tuple[str, Tuple[str, ...]]]:
    """(name, sources) for a known pattern, else None."""
    return AUTHENTIC_NAMES.get(_key(pattern))


def get_pattern_family(pattern) -> Optional[PatternFamily]:
    return PATTERN_FAMILIES.get(_key(pattern))


def get_variations(pattern) -> List[PatternVariation]:
    family = get_pattern_family(pattern)
    return list(family.variations) if family else []


def get_related_patterns(pattern) -> List[RelatedPattern]:
    family = get_pattern_family(pattern)
    return list(family.related_patterns) if family else []


def get_patterns_by_relationship(pattern, relationship) -> List[RelatedPattern]:
    if relationship not in RELATIONSHIPS:
        raise ValueError(f"Unknown relationship '{relationship}'")
    return [p for p in get_related_patterns(pattern) if p.relationship == relationship]
