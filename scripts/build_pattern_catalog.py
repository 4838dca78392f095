"""
Build a static JSON catalog of canonical siteswaps.

Usage:
    python scripts/build_pattern_catalog.py --objects 3 4 5 --max-length 3
"""
import sys, os, argparse, json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from juggleforge.catalog import CLASSIC_PATTERNS, PatternCatalog
from juggleforge.naming import lookup_name
from juggleforge.store import GenerationCache


def build(objects, max_length, include_zeros):
    catalog = PatternCatalog(cache=GenerationCache())
    entries = {}
    for n in objects:
        patterns = catalog.generate_patterns(
            n, pattern_length=max_length, include_zeros=include_zeros
        )
        rows = []
        for p in patterns:
            named = lookup_name(p.pattern)
            rows.append({
                "pattern": p.pattern,
                "period": p.period,
                "difficulty": round(p.difficulty, 3),
                "description": p.description,
                "tags": p.tags,
                "name": named[0] if named else None,
                "classic": p.pattern in CLASSIC_PATTERNS.get(n, []),
            })
        entries[str(n)] = rows
        print(f"  {n} objects: {len(rows)} patterns")
    return entries


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--objects", type=int, nargs="+", default=[3, 4, 5])
    parser.add_argument("--max-length", type=int, default=3)
    parser.add_argument("--include-zeros", action="store_true")
    parser.add_argument("--output", type=str, default="data/pattern_catalog.json")
    args = parser.parse_args()

    print(f"Building catalog for {args.objects} objects, periods 1..{args.max_length}")
    entries = build(args.objects, args.max_length, args.include_zeros)

    out_dir = os.path.dirname(args.output)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(args.output, "w") as f:
        json.dump(entries, f, indent=2)
    print(f"\nCatalog saved to: {args.output}")


if __name__ == "__main__":
    main()
